# vznx type definitions
# Rev 0.1.0

from __future__ import annotations
from typing import Literal

# Project status is derived from progress, never set directly
ProjectStatus = Literal["In Progress", "Completed"]

IN_PROGRESS: ProjectStatus = "In Progress"
COMPLETED: ProjectStatus = "Completed"

# Workload classification: Normal → Elevated → Critical
RiskTier = Literal["Normal", "Elevated", "Critical"]

NORMAL: RiskTier = "Normal"
ELEVATED: RiskTier = "Elevated"
CRITICAL: RiskTier = "Critical"


def status_for(progress: int) -> ProjectStatus:
    return COMPLETED if progress == 100 else IN_PROGRESS
