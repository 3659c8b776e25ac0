from .callback import LtiGradeCallback

__all__ = ["LtiGradeCallback"]
