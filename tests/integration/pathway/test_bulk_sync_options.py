"""Integration tests for bulk option sync against a real (SQLite) database.

Each scenario goes through the command bus, so the handler's transaction,
row lock and rollback behaviour are exercised too.
"""

import pytest

from core.containers import PathwayContainer
from src.framework.application import CommandBus
from src.framework.domain.errors import FieldValidationError, NotFoundError, OperationFailedError
from src.routing_bc.pathway.application.commands import BulkSyncPathwayOptionsCommand
from src.routing_bc.pathway.domain.errors import ErrorCode
from src.routing_bc.pathway.domain.value_objects import OptionInput, TollInput
from src.routing_bc.pathway.infrastructure.models import PathwayOptionModel, PathwayOptionTollModel
from src.routing_bc.pathway.infrastructure.repositories import (
    PathwayOptionRepository,
    PathwayOptionTollRepository,
)


@pytest.fixture
def command_bus(db_session):
    return CommandBus(PathwayContainer(session=db_session))


@pytest.fixture
def sync(command_bus):
    def _sync(pathway_id, *options):
        return command_bus.dispatch(BulkSyncPathwayOptionsCommand(pathway_id=pathway_id, options=tuple(options)))
    return _sync


def new_option(name, **kwargs):
    kwargs.setdefault("distance_km", 100.0)
    kwargs.setdefault("typical_time_min", 60)
    return OptionInput(name=name, **kwargs)


def tolls(*node_ids):
    return tuple(TollInput(node_id=node_id, pass_time_min=4, sequence=10 * i) for i, node_id in enumerate(node_ids))


def snapshot(entity):
    return sorted(
        (o.name, o.is_default, tuple((t.node_id, t.sequence) for t in o.tolls))
        for o in entity.options
    )


def default_count(db_session, pathway_id):
    return db_session.query(PathwayOptionModel).filter(
        PathwayOptionModel.pathway_id == pathway_id,
        PathwayOptionModel.is_default.is_(True),
        PathwayOptionModel.deleted_at.is_(None),
    ).count()


class TestBulkSyncScenarios:
    """End-to-end reconciliation scenarios."""

    def test_replace_default_with_new_option(self, db_session, sync, load_entity, pathway_id, seeded_options):
        """[A(default), B] + [A, C(default)] leaves {A, C} with C as default."""
        a = seeded_options["A"]

        entity = sync(pathway_id, OptionInput(name="Highway", id=a, is_default=False), new_option("Mountain", is_default=True))

        by_name = {o.name: o for o in entity.options}
        assert set(by_name) == {"Highway", "Mountain"}
        assert by_name["Mountain"].is_default is True
        assert by_name["Highway"].is_default is False
        assert default_count(db_session, pathway_id) == 1

        deleted = db_session.get(PathwayOptionModel, seeded_options["B"])
        assert deleted.deleted_at is not None

    def test_current_default_is_kept(self, sync, pathway_id, seeded_options):
        a, b = seeded_options["A"], seeded_options["B"]

        entity = sync(pathway_id, OptionInput(name="Highway", id=a), OptionInput(name="Coastal", id=b), new_option("Scenic"))

        assert entity.default_option.id == a
        assert len(entity.options) == 3

    def test_first_option_becomes_default(self, sync, pathway_id, node_ids):
        entity = sync(pathway_id, new_option("First"), new_option("Second"))

        assert [(o.name, o.is_default) for o in entity.options] == [("First", True), ("Second", False)]

    def test_deactivated_default_stays_default(self, sync, pathway_id, seeded_options):
        """Without an explicit flag the stored default is kept even when deactivated."""
        a, b = seeded_options["A"], seeded_options["B"]

        entity = sync(pathway_id, OptionInput(name="Highway", id=a, active=False), OptionInput(name="Coastal", id=b))

        assert entity.default_option.id == a
        assert entity.default_option.active is False

    def test_inactive_first_option_becomes_default(self, sync, pathway_id):
        entity = sync(pathway_id, new_option("Parked", active=False), new_option("Running"))

        assert entity.default_option.name == "Parked"

    def test_new_option_gets_avg_speed(self, sync, pathway_id):
        entity = sync(pathway_id, new_option("Fast", distance_km=150.0, typical_time_min=90))
        assert entity.options[0].avg_speed_kmh == 100.0

    def test_pass_through_option(self, sync, pathway_id):
        entity = sync(pathway_id, new_option("Express", is_pass_through=True, pass_through_time_min=15))
        option = entity.options[0]
        assert option.is_pass_through is True
        assert option.pass_through_time_min == 15

    def test_update_recomputes_avg_speed(self, sync, pathway_id, seeded_options):
        entity = sync(pathway_id, OptionInput(name="Highway", id=seeded_options["A"], distance_km=150.0))
        assert entity.options[0].avg_speed_kmh == 100.0

    def test_update_keeps_unsent_fields(self, sync, pathway_id, seeded_options):
        entity = sync(pathway_id, OptionInput(name="Renamed", id=seeded_options["A"], description="via coast"))

        option = entity.options[0]
        assert option.name == "Renamed"
        assert option.description == "via coast"
        assert option.distance_km == 120.0
        assert option.typical_time_min == 90


class TestBulkSyncRejections:
    """Rejected payloads leave the stored pathway untouched."""

    def test_removing_default_without_replacement(self, sync, load_entity, pathway_id, seeded_options):
        before = snapshot(load_entity(pathway_id))

        with pytest.raises(FieldValidationError) as exc_info:
            sync(pathway_id, OptionInput(name="Coastal", id=seeded_options["B"]))

        assert exc_info.value.codes == [ErrorCode.BUSINESS_RULE_VIOLATION]
        assert exc_info.value.errors[0].value == seeded_options["A"]
        assert snapshot(load_entity(pathway_id)) == before

    def test_empty_payload(self, sync, load_entity, pathway_id, seeded_options):
        with pytest.raises(FieldValidationError) as exc_info:
            sync(pathway_id)

        assert exc_info.value.codes == [ErrorCode.REQUIRED]
        assert [o.name for o in load_entity(pathway_id).options] == ["Highway", "Coastal"]

    def test_duplicate_names(self, db_session, sync, pathway_id):
        with pytest.raises(FieldValidationError) as exc_info:
            sync(pathway_id, new_option("Scenic Route"), new_option("scenic route"))

        assert exc_info.value.codes == [ErrorCode.DUPLICATE_NAMES]
        assert db_session.query(PathwayOptionModel).count() == 0

    def test_back_to_back_toll_duplicate(self, db_session, sync, pathway_id, node_ids):
        with pytest.raises(FieldValidationError) as exc_info:
            sync(pathway_id, new_option("Tolled", tolls=tolls(node_ids[2], node_ids[2])))

        assert set(exc_info.value.codes) == {ErrorCode.DUPLICATE_NODES, ErrorCode.CONSECUTIVE_DUPLICATES}
        assert db_session.query(PathwayOptionTollModel).count() == 0

    def test_unknown_toll_node(self, sync, pathway_id):
        with pytest.raises(FieldValidationError) as exc_info:
            sync(pathway_id, new_option("Tolled", tolls=tolls(9999)))

        assert exc_info.value.codes == [ErrorCode.NODES_NOT_FOUND]

    def test_option_of_another_pathway(self, sync, pathway_id, seeded_options, other_pathway_option_id):
        with pytest.raises(FieldValidationError) as exc_info:
            sync(
                pathway_id,
                OptionInput(name="Highway", id=seeded_options["A"]),
                OptionInput(name="Elsewhere", id=other_pathway_option_id),
            )

        assert exc_info.value.codes == [ErrorCode.WRONG_PATHWAY]

    def test_inactive_explicit_default(self, db_session, sync, load_entity, pathway_id, seeded_options):
        before = snapshot(load_entity(pathway_id))

        with pytest.raises(FieldValidationError) as exc_info:
            sync(
                pathway_id,
                OptionInput(name="Highway", id=seeded_options["A"]),
                new_option("Dead", is_default=True, active=False),
            )

        assert [e.field for e in exc_info.value.errors] == ["options[1].active"]
        assert exc_info.value.codes == [ErrorCode.BUSINESS_RULE_VIOLATION]
        assert snapshot(load_entity(pathway_id)) == before
        assert db_session.query(PathwayOptionModel).filter(PathwayOptionModel.name == "Dead").count() == 0

    def test_update_breaking_pass_through_rule(self, db_session, sync, load_entity, pathway_id, seeded_options):
        """An invalid update is rejected during validation, before the create runs."""
        before = snapshot(load_entity(pathway_id))

        with pytest.raises(FieldValidationError) as exc_info:
            sync(
                pathway_id,
                new_option("New"),
                OptionInput(name="Highway", id=seeded_options["A"], is_pass_through=True),
            )

        assert [e.field for e in exc_info.value.errors] == ["options[1].passThroughTimeMin"]
        assert snapshot(load_entity(pathway_id)) == before
        assert db_session.query(PathwayOptionModel).filter(PathwayOptionModel.name == "New").count() == 0

    def test_unknown_pathway(self, sync):
        with pytest.raises(NotFoundError):
            sync(404, new_option("Nowhere"))


class TestBulkSyncTolls:
    """Toll list replacement semantics."""

    def test_omitted_tolls_are_kept_and_empty_list_clears(self, sync, load_entity, pathway_id, seeded_options, node_ids):
        a, b = seeded_options["A"], seeded_options["B"]

        entity = sync(
            pathway_id,
            OptionInput(name="Highway", id=a),
            OptionInput(name="Coastal", id=b, tolls=tolls(node_ids[3], node_ids[4])),
        )
        tolls_by_name = {o.name: [t.node_id for t in o.tolls] for o in entity.options}
        assert tolls_by_name == {"Highway": [node_ids[2]], "Coastal": [node_ids[3], node_ids[4]]}

        entity = sync(
            pathway_id,
            OptionInput(name="Highway", id=a, tolls=()),
            OptionInput(name="Coastal", id=b),
        )
        tolls_by_name = {o.name: [t.node_id for t in o.tolls] for o in entity.options}
        assert tolls_by_name == {"Highway": [], "Coastal": [node_ids[3], node_ids[4]]}

    def test_sequence_follows_payload_order(self, sync, pathway_id, node_ids):
        entity = sync(pathway_id, new_option("Tolled", tolls=tolls(node_ids[5], node_ids[3], node_ids[4])))

        stored = [(t.node_id, t.sequence) for t in entity.options[0].tolls]
        assert stored == [(node_ids[5], 1), (node_ids[3], 2), (node_ids[4], 3)]

    def test_created_options_get_their_own_tolls(self, sync, pathway_id, node_ids):
        entity = sync(
            pathway_id,
            new_option("North", tolls=tolls(node_ids[2])),
            new_option("South", tolls=tolls(node_ids[3], node_ids[4])),
        )

        tolls_by_name = {o.name: [t.node_id for t in o.tolls] for o in entity.options}
        assert tolls_by_name == {"North": [node_ids[2]], "South": [node_ids[3], node_ids[4]]}

    def test_same_payload_twice_is_idempotent(self, sync, pathway_id, seeded_options, node_ids):
        first = sync(
            pathway_id,
            OptionInput(name="Highway", id=seeded_options["A"], tolls=tolls(node_ids[2], node_ids[3])),
            new_option("Mountain", is_default=True, tolls=tolls(node_ids[4])),
        )
        mountain_id = next(o.id for o in first.options if o.name == "Mountain")

        second = sync(
            pathway_id,
            OptionInput(name="Highway", id=seeded_options["A"], tolls=tolls(node_ids[2], node_ids[3])),
            new_option("Mountain", id=mountain_id, is_default=True, tolls=tolls(node_ids[4])),
        )

        assert snapshot(second) == snapshot(first)
        assert [o.id for o in second.options] == [o.id for o in first.options]


class TestBulkSyncAtomicity:
    """Failures after validation roll back every write of the sync."""

    def test_failure_while_syncing_tolls_rolls_back(
        self, monkeypatch, db_session, sync, load_entity, pathway_id, seeded_options, node_ids
    ):
        before = snapshot(load_entity(pathway_id))

        def broken_replace(self, option_id, new_tolls):
            raise RuntimeError("toll store unavailable")

        monkeypatch.setattr(PathwayOptionTollRepository, "replace_for_option", broken_replace)

        with pytest.raises(RuntimeError):
            sync(
                pathway_id,
                OptionInput(name="Highway", id=seeded_options["A"]),
                new_option("Mountain", is_default=True, tolls=tolls(node_ids[4])),
            )

        assert snapshot(load_entity(pathway_id)) == before
        assert db_session.query(PathwayOptionModel).filter(PathwayOptionModel.name == "Mountain").count() == 0

    def test_store_constraint_violation_becomes_operation_failure(
        self, monkeypatch, db_session, sync, load_entity, pathway_id, seeded_options
    ):
        """Setting a second default without clearing the first hits the unique index."""
        before = snapshot(load_entity(pathway_id))

        def set_default_without_clearing(self, pathway_id, option_id):
            self.session.query(PathwayOptionModel).filter(
                PathwayOptionModel.id == option_id
            ).update({PathwayOptionModel.is_default: True}, synchronize_session=False)

        monkeypatch.setattr(PathwayOptionRepository, "set_default_option", set_default_without_clearing)

        with pytest.raises(OperationFailedError):
            sync(
                pathway_id,
                OptionInput(name="Highway", id=seeded_options["A"]),
                OptionInput(name="Coastal", id=seeded_options["B"], is_default=True),
            )

        assert snapshot(load_entity(pathway_id)) == before
        assert default_count(db_session, pathway_id) == 1
