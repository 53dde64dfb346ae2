"""Pure transforms applied to a job request before it is submitted.

None of these functions mutate their input; each returns a modified copy.
"""

import uuid
from pathlib import Path
from typing import Dict, Optional

from ..core.models import JobSubmitRequest, RuntimeEnv
from ..packaging.uri import is_remote_uri

SUBMISSION_ID_PREFIX = "raysubmit_"

# Pre-built artifacts accepted as py_modules entries
PREBUILT_MODULE_SUFFIXES = (".whl", ".zip")


def generate_submission_id() -> str:
    return f"{SUBMISSION_ID_PREFIX}{uuid.uuid4().hex[:16]}"


def with_submission_id(request: JobSubmitRequest) -> JobSubmitRequest:
    """Return a copy of request that carries a submission id."""
    if request.submission_id:
        return request.model_copy(deep=True)
    return request.model_copy(
        update={"submission_id": generate_submission_id()}, deep=True
    )


def _local_path(value: str) -> Optional[Path]:
    if is_remote_uri(value):
        return None
    path = Path(value).expanduser()
    return path if path.exists() else None


def local_working_dir(request: JobSubmitRequest) -> Optional[Path]:
    """Return the working directory if it names an existing local directory."""
    runtime_env = request.runtime_env
    if runtime_env is None or not runtime_env.working_dir:
        return None

    path = _local_path(runtime_env.working_dir)
    if path is None or not path.is_dir():
        return None
    return path


def rewrite_working_dir(request: JobSubmitRequest, working_dir_uri: str) -> JobSubmitRequest:
    """Return a copy of request whose working directory is ``working_dir_uri``."""
    rewritten = request.model_copy(deep=True)
    if rewritten.runtime_env is None:
        rewritten.runtime_env = RuntimeEnv()
    rewritten.runtime_env.working_dir = working_dir_uri
    return rewritten


def local_py_modules(request: JobSubmitRequest) -> Dict[str, Path]:
    """Map each py_modules entry naming a local directory or artifact to its path."""
    runtime_env = request.runtime_env
    if runtime_env is None or not runtime_env.py_modules:
        return {}

    modules = {}
    for module in runtime_env.py_modules:
        path = _local_path(module)
        if path is None:
            continue
        if path.is_dir() or path.suffix in PREBUILT_MODULE_SUFFIXES:
            modules[module] = path
    return modules


def rewrite_py_modules(
    request: JobSubmitRequest, module_uris: Dict[str, str]
) -> JobSubmitRequest:
    """Return a copy of request with py_modules entries replaced by URIs.

    Args:
        request: Request to copy.
        module_uris: Original py_modules entry -> package URI. Entries not in
            the mapping are kept as is.
    """
    rewritten = request.model_copy(deep=True)
    rewritten.runtime_env.py_modules = [
        module_uris.get(module, module) for module in rewritten.runtime_env.py_modules
    ]
    return rewritten
