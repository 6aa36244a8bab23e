"""
Central Configuration Module for ABA Insights.

=== PURPOSE ===
This module is the single source of truth for every tunable constant,
threshold, limit and generator catalogue used across the dashboard.  Every
other module imports from here rather than defining its own magic numbers,
so the system can be re-tuned without scattered code changes.

=== DATA FLOW ===
  1. The generator (aba_insights.data.generator) reads CLIENT_NAMES,
     THERAPISTS, PROGRAM_CATALOG and TARGET_TEMPLATES to build the synthetic
     reference tables and event log.
  2. The filter pipeline (aba_insights.pipeline) reads MASTERY_THRESHOLD,
     DEFAULT_LOOKBACK_MONTHS, MASTERY_MIN / MASTERY_MAX and
     TARGET_SEARCH_LIMIT.
  3. The dashboard reads DASHBOARD_* settings and THEMES.

A few values can be overridden through environment variables so that a
demo can be re-seeded without code changes.
"""

import os
import logging

logger = logging.getLogger(__name__)

# ==========================================
# FILTER / AGGREGATION SETTINGS
# ==========================================
# A target counts as "mastered" once its mastery percentage reaches this
# value.  Drives the Mastered Targets KPI and the targets card action.
MASTERY_THRESHOLD = 80.0

# Full mastery range offered by the sidebar slider (percent).
MASTERY_MIN = 0.0
MASTERY_MAX = 100.0

# Default date window of a fresh filter: the last N months ending today.
DEFAULT_LOOKBACK_MONTHS = 6

# Maximum number of target matches shown by the target search box.
TARGET_SEARCH_LIMIT = 50

# Label format for the cumulative progress chart ("Mar 2024").
MONTH_LABEL_FORMAT = "%b %Y"

# ==========================================
# COLUMN MAPPINGS
# ==========================================
# Canonical DataFrame columns for each collection.  The dataclasses in
# aba_insights.models mirror these one-to-one.
CLIENT_COLUMNS = ['id', 'name', 'age', 'diagnosis_date', 'therapist', 'status']
PROGRAM_COLUMNS = ['id', 'name', 'category', 'target_count']
TARGET_COLUMNS = ['id', 'program_id', 'name', 'mastery', 'trials', 'success_rate']
EVENT_COLUMNS = [
    'date', 'client_id', 'program_id', 'target_id',
    'correct', 'incorrect', 'session_duration',
]

# Selection facets of a FilterSpec, keyed by the name used in toggle_facet.
SELECTION_FACETS = ('client_ids', 'program_ids', 'categories', 'therapists', 'target_ids')

# Summary cards that accept a click action.
CARD_ACTIONS = ('clients', 'accuracy', 'programs', 'targets')

# ==========================================
# DOMAIN VOCABULARY
# ==========================================
CLIENT_STATUSES = ('Active', 'Inactive', 'Discharged')

PROGRAM_CATEGORIES = (
    'Communication', 'Social Skills', 'Self-Care', 'Behavioral', 'Academic',
)

# ==========================================
# SYNTHETIC DATA CATALOGUES
# ==========================================
# Seed used when none is supplied on the command line or in the sidebar.
DEFAULT_SEED = int(os.environ.get("ABA_INSIGHTS_SEED", "42"))

# Number of months of synthetic history ending at the current month.
GENERATOR_HISTORY_MONTHS = int(os.environ.get("ABA_INSIGHTS_HISTORY_MONTHS", "11"))

CLIENT_NAMES = [
    'Emma Johnson', 'Liam Smith', 'Olivia Williams', 'Noah Brown', 'Ava Davis',
    'Ethan Miller', 'Sophia Wilson', 'Mason Moore', 'Isabella Taylor', 'Lucas Anderson',
    'Mia Thomas', 'Oliver Jackson', 'Charlotte White', 'Elijah Harris', 'Amelia Martin',
    'James Thompson', 'Harper Garcia', 'Benjamin Martinez', 'Evelyn Robinson', 'Alexander Clark',
]

THERAPISTS = [
    'Dr. Sarah Mitchell', 'Dr. John Peterson', 'Dr. Emily Chen', 'Dr. Michael Rodriguez',
    'Dr. Jessica Lee', 'Dr. David Kim', 'Dr. Amanda Wilson',
]

# Client status is assigned by roster position: the first ACTIVE_CLIENT_COUNT
# are Active, the next INACTIVE_CLIENT_COUNT Inactive, the rest Discharged.
ACTIVE_CLIENT_COUNT = 17
INACTIVE_CLIENT_COUNT = 2

# (id, name, category, declared target count)
PROGRAM_CATALOG = [
    ('p1', 'Requesting', 'Communication', 12),
    ('p2', 'Labeling', 'Communication', 15),
    ('p3', 'Social Greetings', 'Social Skills', 8),
    ('p4', 'Turn-Taking', 'Social Skills', 10),
    ('p5', 'Independent Dressing', 'Self-Care', 6),
    ('p6', 'Hand Washing', 'Self-Care', 5),
    ('p7', 'On-Task Behavior', 'Behavioral', 7),
    ('p8', 'Following Instructions', 'Behavioral', 9),
    ('p9', 'Number Recognition', 'Academic', 20),
    ('p10', 'Letter Identification', 'Academic', 26),
    ('p11', 'Sharing', 'Social Skills', 6),
    ('p12', 'Emotion Recognition', 'Social Skills', 8),
]

# Target names per program.  Programs that declare more targets than they
# have templates fall back to "Target N" for the remainder.
TARGET_TEMPLATES = {
    'Requesting': ['Request for water', 'Request for snack', 'Request for break',
                   'Request for toy', 'Request for help'],
    'Labeling': ['Label colors', 'Label animals', 'Label body parts',
                 'Label objects', 'Label actions'],
    'Social Greetings': ['Wave hello', 'Say goodbye', 'Eye contact during greeting',
                         'Respond to name'],
    'Turn-Taking': ['Wait for turn', 'Share materials', 'Participate in group activity'],
    'Independent Dressing': ['Put on shirt', 'Put on pants', 'Put on shoes', 'Zip jacket'],
    'Hand Washing': ['Turn on water', 'Apply soap', 'Scrub hands', 'Rinse', 'Dry hands'],
    'On-Task Behavior': ['Sit at table', 'Attend to task', 'Complete task',
                         'Transition appropriately'],
    'Following Instructions': ['1-step instruction', '2-step instruction', '3-step instruction'],
    'Number Recognition': [f'Identify {i + 1}' for i in range(20)],
    'Letter Identification': [f'Identify {chr(65 + i)}' for i in range(26)],
    'Sharing': ['Share toy', 'Share materials', 'Take turns with peer'],
    'Emotion Recognition': ['Happy', 'Sad', 'Angry', 'Surprised', 'Scared', 'Excited'],
}

# Session simulation parameters.
SESSIONS_PER_TARGET = (20, 80)        # [low, high) sessions per client/target
TRIALS_PER_SESSION = (5, 20)          # [low, high) trials per session
SESSION_MINUTES = (15, 45)            # [low, high) session duration
LIFETIME_TRIALS = (50, 250)           # [low, high) Target.trials
LEARNING_BONUS = 0.3                  # success lift reached by the end of the window
MAX_SUCCESS_PROBABILITY = 0.95
SUCCESS_NOISE = 0.2                   # full width of the uniform noise band

# ==========================================
# DASHBOARD SETTINGS
# ==========================================
DASHBOARD_TITLE = "ABA Progress Dashboard"
DASHBOARD_PORT = int(os.environ.get("ABA_INSIGHTS_PORT", "8501"))
DEFAULT_THEME = os.environ.get("ABA_INSIGHTS_THEME", "light")
THEMES = ('light', 'dark')
