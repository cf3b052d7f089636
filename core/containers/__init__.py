from .pathway_container import PathwayContainer, build_buses

__all__ = ["PathwayContainer", "build_buses"]
