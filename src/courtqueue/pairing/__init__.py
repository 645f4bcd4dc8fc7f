from courtqueue.pairing.team_builder import (
    PartnerHistory,
    TeamBuilder,
    TeamBuildResult,
)

__all__ = ["PartnerHistory", "TeamBuilder", "TeamBuildResult"]
