"""Default configuration values for factly-benchmark.

This module centralizes all hard-coded default values used throughout
the application, making them easy to discover and modify.
"""

# Backend-under-test
DEFAULT_BACKEND_URL = "http://localhost:3002"
DEFAULT_TIMEOUT_MS = 60000
DEFAULT_RUNS_PER_CASE = 1
DEFAULT_SUITES = ("fact-extraction",)

# Target defaults
DEFAULT_PROVIDER = "openai"
DEFAULT_MODEL = "gpt-4o"
DEFAULT_TEMP_EXTRACTION = 0.2
DEFAULT_TEMP_DEDUP = 0.1
DEFAULT_TEMP_IMPACT = 0.1
DEFAULT_TEMP_PROPOSAL = 0.3

# Matching
DEFAULT_MATCHING_METHOD = "string"
DEFAULT_MATCHING_THRESHOLD = 0.5
DEFAULT_TRIGRAM_DEDUP_THRESHOLD = 0.75

# Judge
DEFAULT_JUDGE_OPENAI_BASE_URL = "https://api.openai.com/v1"
ANTHROPIC_MESSAGES_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
JUDGE_MAX_TOKENS = 512
JUDGE_TIMEOUT_SECONDS = 60.0
DEFAULT_JUDGE_MAX_CONCURRENCY = 4
DEFAULT_JUDGE_MAX_RETRIES = 3
DEFAULT_JUDGE_RETRY_DELAY = 1.0

# Comparison and history
DEFAULT_REGRESSION_THRESHOLD = 0.05

# Matrix
LARGE_MATRIX_WARNING = 50

# Storage
DEFAULT_RESULTS_DIR = "results"
DEFAULT_DATASETS_DIR = "datasets"
ERROR_STATUS_THRESHOLD = 0.5

# Suggestions
SUGGESTION_WINDOW = 20
LOW_SCORE_THRESHOLD = 0.5
BEST_CONFIG_MARGIN = 0.02
SUGGESTION_GAP_MARGIN = 0.03
SIGNIFICANT_GAP = 0.1
TEMPERATURE_STEP = 0.05
MAX_TEMPERATURE = 2.0
