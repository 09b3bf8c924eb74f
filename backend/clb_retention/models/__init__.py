from clb_retention.models.retention_input import PlayerRetentionInput, TeamRetentionInput

__all__ = [
    "PlayerRetentionInput",
    "TeamRetentionInput",
]
