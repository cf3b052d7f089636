from .pathway_router import router as pathway_router

__all__ = ["pathway_router"]
