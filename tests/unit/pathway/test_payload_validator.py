"""Unit tests for bulk sync payload validation, with in-memory repositories."""

import pytest

from src.framework.domain.errors import FieldValidationError
from src.routing_bc.node.domain.entities import Node
from src.routing_bc.pathway.domain.entities import PathwayOption
from src.routing_bc.pathway.domain.errors import ErrorCode
from src.routing_bc.pathway.domain.services.pathway_option_sync_service import (
    PathwayOptionSyncService,
    check_toll_nodes_exist,
)
from src.routing_bc.pathway.domain.value_objects import OptionInput, TollInput


class InMemoryOptionRepository:
    def __init__(self, options):
        self.options = {o.id: o for o in options}
        self.calls = []

    def find_by_ids(self, ids):
        self.calls.append(set(ids))
        return [self.options[i] for i in ids if i in self.options]


class InMemoryNodeRepository:
    def __init__(self, node_ids):
        self.node_ids = set(node_ids)
        self.calls = []

    def find_by_ids(self, ids):
        self.calls.append(set(ids))
        return [Node(id=i, code=str(i), name=str(i)) for i in ids if i in self.node_ids]


def new_option(name, **kwargs):
    kwargs.setdefault("distance_km", 100.0)
    kwargs.setdefault("typical_time_min", 60)
    return OptionInput(name=name, **kwargs)


def tolls(*node_ids):
    return tuple(TollInput(node_id=node_id, pass_time_min=3) for node_id in node_ids)


@pytest.fixture
def option_repository():
    return InMemoryOptionRepository([
        PathwayOption(id=10, pathway_id=1, name="Highway", is_default=True),
        PathwayOption(id=11, pathway_id=1, name="Coastal"),
        PathwayOption(id=20, pathway_id=2, name="Elsewhere", is_default=True),
    ])


@pytest.fixture
def node_repository():
    return InMemoryNodeRepository([100, 101, 102])


@pytest.fixture
def service(option_repository, node_repository):
    return PathwayOptionSyncService(option_repository, node_repository, max_options=5)


def rejected_codes(service, options, pathway_id=1):
    with pytest.raises(FieldValidationError) as exc_info:
        service.validate_bulk_sync_payload(pathway_id, options)
    return exc_info.value.codes


class TestValidateBulkSyncPayload:
    """Tests for the payload checks and their batching."""

    def test_valid_payload(self, service):
        service.validate_bulk_sync_payload(1, [
            OptionInput(name="Highway", id=10),
            new_option("Scenic", tolls=tolls(100, 101)),
        ])

    def test_empty_payload(self, service):
        assert rejected_codes(service, []) == [ErrorCode.REQUIRED]

    def test_too_many_options(self, service):
        options = [new_option(f"Option {i}") for i in range(6)]
        assert rejected_codes(service, options) == [ErrorCode.TOO_MANY_OPTIONS]

    def test_multiple_defaults(self, service):
        options = [new_option("a", is_default=True), new_option("b", is_default=True)]
        assert rejected_codes(service, options) == [ErrorCode.MULTIPLE_DEFAULTS]

    def test_duplicate_names_case_insensitive_and_trimmed(self, service):
        with pytest.raises(FieldValidationError) as exc_info:
            service.validate_bulk_sync_payload(1, [new_option("Scenic Route"), new_option("  scenic route ")])

        error = exc_info.value.errors[0]
        assert error.code == ErrorCode.DUPLICATE_NAMES
        assert error.value == "scenic route"

    def test_unknown_option_ids(self, service):
        options = [OptionInput(name="a", id=10), OptionInput(name="b", id=99), OptionInput(name="c", id=98)]

        with pytest.raises(FieldValidationError) as exc_info:
            service.validate_bulk_sync_payload(1, options)

        assert exc_info.value.codes == [ErrorCode.OPTIONS_NOT_FOUND]
        assert exc_info.value.errors[0].value == "98, 99"

    def test_option_from_another_pathway(self, service):
        assert rejected_codes(service, [OptionInput(name="x", id=20)]) == [ErrorCode.WRONG_PATHWAY]

    def test_ownership_checked_with_one_lookup(self, service, option_repository):
        service.validate_bulk_sync_payload(1, [OptionInput(name="a", id=10), OptionInput(name="b", id=11)])
        assert option_repository.calls == [{10, 11}]

    def test_missing_toll_nodes(self, service):
        options = [new_option("a", tolls=tolls(100, 500)), new_option("b", tolls=tolls(400))]

        with pytest.raises(FieldValidationError) as exc_info:
            service.validate_bulk_sync_payload(1, options)

        error = exc_info.value.errors[0]
        assert error.code == ErrorCode.NODES_NOT_FOUND
        assert error.value == "400, 500"

    def test_toll_structure_errors_pinpoint_option(self, service):
        options = [new_option("a", tolls=tolls(100)), new_option("b", tolls=tolls(101, 101))]

        with pytest.raises(FieldValidationError) as exc_info:
            service.validate_bulk_sync_payload(1, options)

        assert {e.field for e in exc_info.value.errors} == {"options[1].tolls"}
        assert exc_info.value.codes == [ErrorCode.DUPLICATE_NODES, ErrorCode.CONSECUTIVE_DUPLICATES]

    def test_new_option_requires_metrics(self, service):
        with pytest.raises(FieldValidationError) as exc_info:
            service.validate_bulk_sync_payload(1, [OptionInput(name="bare")])

        assert [e.field for e in exc_info.value.errors] == ["options[0].distanceKm", "options[0].typicalTimeMin"]

    def test_update_only_checks_given_values(self, service):
        service.validate_bulk_sync_payload(1, [OptionInput(name="Highway", id=10)])

    def test_update_rejects_time_without_pass_through(self, service):
        options = [OptionInput(name="Highway", id=10, pass_through_time_min=5)]
        assert rejected_codes(service, options) == [ErrorCode.BUSINESS_RULE_VIOLATION]

    def test_update_checked_against_stored_values(self, service):
        """Turning pass-through on needs a time, sent or already stored."""
        options = [new_option("New"), OptionInput(name="Highway", id=10, is_pass_through=True)]

        with pytest.raises(FieldValidationError) as exc_info:
            service.validate_bulk_sync_payload(1, options)

        assert [e.field for e in exc_info.value.errors] == ["options[1].passThroughTimeMin"]

    def test_update_reuses_ownership_lookup(self, service, option_repository):
        options = [OptionInput(name="Highway", id=10, is_pass_through=True, pass_through_time_min=8)]

        service.validate_bulk_sync_payload(1, options)

        assert option_repository.calls == [{10}]

    def test_explicit_default_must_be_active(self, service):
        options = [OptionInput(name="Highway", id=10), new_option("Dead", is_default=True, active=False)]

        with pytest.raises(FieldValidationError) as exc_info:
            service.validate_bulk_sync_payload(1, options)

        error = exc_info.value.errors[0]
        assert (error.field, error.code) == ("options[1].active", ErrorCode.BUSINESS_RULE_VIOLATION)

    def test_stored_default_can_be_deactivated_without_flag(self, service):
        service.validate_bulk_sync_payload(1, [OptionInput(name="Highway", id=10, active=False)])

    def test_failures_are_batched(self, service):
        """Every failing check is reported in one error, in check order."""
        options = [
            new_option("dup", is_default=True),
            new_option("DUP", is_default=True, tolls=tolls(999, 999)),
            OptionInput(name="x", id=20),
        ]

        assert rejected_codes(service, options) == [
            ErrorCode.MULTIPLE_DEFAULTS,
            ErrorCode.DUPLICATE_NAMES,
            ErrorCode.WRONG_PATHWAY,
            ErrorCode.NODES_NOT_FOUND,
            ErrorCode.DUPLICATE_NODES,
            ErrorCode.CONSECUTIVE_DUPLICATES,
        ]


class TestCheckTollNodesExist:
    """Tests for the node existence checker."""

    def test_single_lookup_for_all_options(self, node_repository):
        options = [new_option("a", tolls=tolls(100, 101)), new_option("b", tolls=tolls(101, 102))]

        assert check_toll_nodes_exist(options, node_repository) == []
        assert node_repository.calls == [{100, 101, 102}]

    def test_no_lookup_without_tolls(self, node_repository):
        assert check_toll_nodes_exist([new_option("a"), new_option("b", tolls=())], node_repository) == []
        assert node_repository.calls == []
