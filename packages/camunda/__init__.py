"""Camunda 7 engine REST client and query helpers."""

from packages.camunda.auth import (
    decode_basic_username,
    describe_auth_header,
    resolve_auth_header,
)
from packages.camunda.client import CamundaClient, CamundaError
from packages.camunda.query import (
    build_filter_list_body,
    build_task_query_params,
    extract_filter_tasks,
    project_filter_task,
    sort_task_filters,
    unique_process_definitions,
)

__all__ = [
    "CamundaClient",
    "CamundaError",
    "build_filter_list_body",
    "build_task_query_params",
    "decode_basic_username",
    "describe_auth_header",
    "extract_filter_tasks",
    "project_filter_task",
    "resolve_auth_header",
    "sort_task_filters",
    "unique_process_definitions",
]
