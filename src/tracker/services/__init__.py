from src.tracker.services.project_service import ProjectService, summarize_projects

__all__ = ["ProjectService", "summarize_projects"]
