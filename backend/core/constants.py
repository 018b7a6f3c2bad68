"""
Core constants — **Single Source of Truth** for project-wide magic numbers.

Any business rule that references a fixed value (session lifetime,
status groupings, attachment limits) should import it from here instead
of hardcoding.  This avoids drift between apps that use the same value.
"""

from datetime import timedelta

# ── Session ─────────────────────────────────────────────────────────
# Signed access tokens are valid for one hour and cannot be refreshed;
# the client must sign in again once the token expires.
SESSION_LIFETIME: timedelta = timedelta(hours=1)

# ── Crime statuses counted as "ongoing" on officer dashboards ───────
# Kept as raw values so that ``core`` never imports ``crimes`` at module
# load time.
ONGOING_CRIME_STATUSES: tuple[str, ...] = ("investigation", "pending")

# ── Administrative badge numbers ────────────────────────────────────
# Badge numbers are sequential; the first officer ever created gets 1.
FIRST_BADGE_NUMBER: int = 1

# ── Evidence attachments ────────────────────────────────────────────
# Images travel inline as base64 inside JSON, which bounds the practical
# attachment size.
MAX_EVIDENCE_IMAGE_BYTES: int = 5 * 1024 * 1024  # 5 MiB decoded
DEFAULT_EVIDENCE_MIME: str = "image/jpeg"
DEFAULT_EVIDENCE_FILENAME: str = "evidence.jpg"

# Request bodies carry the image base64-encoded (4/3 of its size) plus the
# surrounding JSON fields.
MAX_REQUEST_BODY_BYTES: int = MAX_EVIDENCE_IMAGE_BYTES * 4 // 3 + 1024 * 1024
