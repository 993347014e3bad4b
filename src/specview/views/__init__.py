"""Operation views and the helpers that derive them.

Sub-modules:

* :mod:`~specview.views.operation` -- :class:`OperationView`.
* :mod:`~specview.views.parameters` -- parameter merging and
  :class:`ParameterView`.
* :mod:`~specview.views.responses` -- status code filtering and
  :class:`ResponseView`.
* :mod:`~specview.views.request_body` -- :class:`RequestBodyView`.
* :mod:`~specview.views.security` -- security requirement resolution.
* :mod:`~specview.views.servers` -- server URL normalisation.
* :mod:`~specview.views.menu` -- tag groups and :func:`build_operation_views`.
"""

from specview.views.menu import (
    GroupView,
    MenuItem,
    build_operation_views,
    find_operation,
    iter_operations,
)
from specview.views.operation import OperationView
from specview.views.parameters import ParameterView, merge_params, sort_by_required
from specview.views.request_body import RequestBodyView
from specview.views.responses import ResponseView, classify_responses, is_status_code, status_family
from specview.views.security import SecurityRequirementView, select_security
from specview.views.servers import normalize_servers, select_servers

__all__ = [
    "GroupView",
    "MenuItem",
    "OperationView",
    "ParameterView",
    "RequestBodyView",
    "ResponseView",
    "SecurityRequirementView",
    "build_operation_views",
    "classify_responses",
    "find_operation",
    "is_status_code",
    "iter_operations",
    "merge_params",
    "normalize_servers",
    "select_security",
    "select_servers",
    "sort_by_required",
    "status_family",
]
