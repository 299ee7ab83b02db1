from suarasekolah.models.chat_log import PENDING_RESPONSE, ChatAiLog
from suarasekolah.models.leaderboard import LeaderboardEntry
from suarasekolah.models.user import PASSWORD_HASH_MARKER, Base, UserProfile, UserRole

__all__ = [
    "Base",
    "ChatAiLog",
    "LeaderboardEntry",
    "PASSWORD_HASH_MARKER",
    "PENDING_RESPONSE",
    "UserProfile",
    "UserRole",
]
