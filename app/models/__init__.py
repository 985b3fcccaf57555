from app.models.project import Project, ProjectIntegration

__all__ = ["Project", "ProjectIntegration"]
