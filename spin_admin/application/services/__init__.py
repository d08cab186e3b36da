"""Application services."""

from spin_admin.application.services.privilege_gate import PrivilegeGate
from spin_admin.application.services.stats_projector import project_distribution

__all__ = ["PrivilegeGate", "project_distribution"]
