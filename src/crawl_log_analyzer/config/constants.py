"""
Constants for crawler identification and crawl report construction.
"""

# =============================================================================
# Crawler Signatures
# =============================================================================

# Family patterns: any of these in a log line marks it as a Google crawler visit.
# Order is kept for readability only, the first hit selects the family.
GOOGLE_FAMILY_PATTERNS = (
    r"Googlebot",
    r"Google-InspectionTool",
    r"Google-Extended",
    r"Googlebot-Image",
    r"Googlebot-Video",
    r"Googlebot-News",
    r"Googlebot-Mobile",
    r"Mediapartners-Google",
    r"AdsBot-Google",
    r"FeedFetcher-Google",
    r"Google Web Preview",
    r"Google-Site-Verification",
    r"Google Favicon",
    r"Googlebot-Desktop",
    r"Googlebot-Smartphone",
)

# Variant table, most specific first. The generic "Googlebot" entry must stay last.
GOOGLE_VARIANTS = (
    (r"Google-InspectionTool", "Google Inspection Tool"),
    (r"Google-Extended", "Google Extended"),
    (r"Googlebot-Image", "Googlebot Image"),
    (r"Googlebot-Video", "Googlebot Video"),
    (r"Googlebot-News", "Googlebot News"),
    (r"Googlebot-Mobile", "Googlebot Mobile"),
    (r"Mediapartners-Google", "Mediapartners Google"),
    (r"AdsBot-Google", "AdsBot Google"),
    (r"FeedFetcher-Google", "FeedFetcher Google"),
    (r"Google Web Preview", "Google Web Preview"),
    (r"Google-Site-Verification", "Google Site Verification"),
    (r"Googlebot-Desktop", "Googlebot Desktop"),
    (r"Googlebot-Smartphone", "Googlebot Smartphone"),
    (r"Googlebot", "Googlebot"),
)

GOOGLE_GENERIC_NAME = "Googlebot"

# Referer fallback (opt-in, see AnalyzerSettings.detect_referer_visits)
GOOGLE_REFERER_PATTERNS = (
    r"https?://[^\s\"']*google\.[^\s\"']*",
    r"referer[:\s]+[^\s\"']*google\.[^\s\"']*",
    r"referrer[:\s]+[^\s\"']*google\.[^\s\"']*",
)
REFERER_BOT_NAME = "Googlebot (via referer)"

# =============================================================================
# Crawler Verification Heuristic
# =============================================================================

# Plain substring checks against the whole line, not CIDR matching.
VERIFICATION_IP_PREFIXES = (
    "66.249.",
    "64.233.",
    "72.14.",
    "74.125.",
    "209.85.",
    "216.239.",
)
VERIFICATION_HOSTNAMES = (
    ".googlebot.com",
    ".google.com",
)

# =============================================================================
# Field Extraction
# =============================================================================

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")

MONTH_NUMBERS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

# Response-time sanity bounds, exclusive on both ends. No unit is assumed.
RESPONSE_TIME_MIN = 0.0
RESPONSE_TIME_MAX = 100000.0

# =============================================================================
# Crawl Budget Classification
# =============================================================================

BUCKET_CANONICAL = "canonical"
BUCKET_WITH_PARAMS = "withParams"
BUCKET_PAGINATION = "pagination"
BUCKET_SERVICE = "service"
BUCKET_NOT_FOUND = "notFound"

CRAWL_BUDGET_BUCKETS = (
    BUCKET_CANONICAL,
    BUCKET_WITH_PARAMS,
    BUCKET_PAGINATION,
    BUCKET_SERVICE,
    BUCKET_NOT_FOUND,
)

# Path segments that mark admin, API, build-asset and static resources
SERVICE_SEGMENTS = (
    "admin",
    "wp-admin",
    "wp-json",
    "wp-includes",
    "api",
    "_next",
    "static",
    "assets",
    "build",
    "dist",
    "cgi-bin",
)

# Depth buckets 0..4, deeper paths share the last bucket
MAX_DEPTH_BUCKET = 5
DEPTH_BUCKETS = ("0", "1", "2", "3", "4", "5+")

# =============================================================================
# Status Distribution
# =============================================================================

# Codes with their own bucket; 5xx and everything else are grouped
TRACKED_STATUS_CODES = (200, 301, 302, 308, 404, 410, 403, 401)
STATUS_BUCKETS = tuple(f"status{code}" for code in TRACKED_STATUS_CODES) + (
    "status5xx",
    "statusOther",
)
REDIRECT_STATUS_CODES = (301, 302, 308)

# =============================================================================
# Memory Bounds and Report Limits
# =============================================================================

BOT_SAMPLE_LIMIT = 3
ERROR_SAMPLE_LIMIT = 3
URL_SAMPLE_LIMIT = 2
SAMPLE_LINE_LENGTH = 200
USER_AGENT_LENGTH = 100
ERROR_URL_LENGTH = 150
TOP_URLS_LIMIT = 20

# =============================================================================
# Progress Reporting
# =============================================================================

PROGRESS_INTERVAL = 100
PROGRESS_SCALE = 90
PROGRESS_CAP = 95
PROGRESS_COMPLETE = 100
