from .records import router as records_router

__all__ = ["records_router"]
