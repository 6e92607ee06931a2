"""Domain layer exports."""

from .job_submitter import TASK_PARAMETERS, JobSubmitter
from .models import (
    CreateTaskReply,
    Keypoint,
    ProcessingResult,
    SummarizationDocument,
    TaskState,
    TaskStatusReply,
)
from .result_parser import SUMMARY_DELIMITER, ResultParser, split_paragraph_summary
from .task_poller import TaskPoller

__all__ = [
    "CreateTaskReply",
    "JobSubmitter",
    "Keypoint",
    "ProcessingResult",
    "ResultParser",
    "SUMMARY_DELIMITER",
    "SummarizationDocument",
    "TASK_PARAMETERS",
    "TaskPoller",
    "TaskState",
    "TaskStatusReply",
    "split_paragraph_summary",
]
