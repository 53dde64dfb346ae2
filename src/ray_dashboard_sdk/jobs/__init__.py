from .client import JobSubmissionClient
from .rewrite import (
    generate_submission_id,
    local_py_modules,
    local_working_dir,
    rewrite_py_modules,
    rewrite_working_dir,
)

__all__ = [
    "JobSubmissionClient",
    "generate_submission_id",
    "local_py_modules",
    "local_working_dir",
    "rewrite_py_modules",
    "rewrite_working_dir",
]
