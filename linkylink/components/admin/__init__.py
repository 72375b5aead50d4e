"""
Admin component - user and global link management.
"""

from .component import (
    ADMIN_REQUIRED,
    SELF_DELETE,
    run_admin_delete_link,
    run_change_role,
    run_delete_user,
    run_load_admin,
)
from .models import AdminDataOutput, AdminOperationOutput

__all__ = [
    # Entry points
    "run_load_admin",
    "run_change_role",
    "run_delete_user",
    "run_admin_delete_link",
    # Messages
    "ADMIN_REQUIRED",
    "SELF_DELETE",
    # Models
    "AdminDataOutput",
    "AdminOperationOutput",
]
