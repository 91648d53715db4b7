# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

MIN_ARRAY_SIZE     = 10
MAX_ARRAY_SIZE     = 200
DEFAULT_ARRAY_SIZE = 100

# Delay per step in milliseconds. Read live by the runner before every
# suspension, so a change applies to the next step only.
MIN_SPEED_MS     = 0.0
MAX_SPEED_MS     = 1000.0
DEFAULT_SPEED_MS = 10.0

# ============================================================
# ========================= LOGGING ==========================
# ============================================================

LOGGER_NAME = "sortanimation"
LOG_LEVEL   = "INFO"
LOG_FORMAT  = "%(asctime)s.%(msecs)03d %(levelname)-7s [%(threadName)s] %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"

# ============================================================
# ======================== PACING ============================
# ============================================================
#
# Every event holds the runner for (speed * pace) milliseconds.
#
# COMPARE_PACE  : comparisons show for half a step.
# SWAP_PACE     : swaps and overwrites take one full step.
# TALLY_PACE    : counting/radix tally markers (no comparison involved).
# CYCLE_TARGET_PACE: cycle sort shows its destination marker longer.
COMPARE_PACE      = 0.5
SWAP_PACE         = 1.0
TALLY_PACE        = 0.5
CYCLE_TARGET_PACE = 2.0

# ============================================================
# ==================== ALGORITHM CONSTANTS ===================
# ============================================================

MIN_RUN     = 32
COMB_SHRINK = 1.3
RADIX_BASE  = 10

# ============================================================
# ====================== FINAL SWEEP =========================
# ============================================================
#
# The confirmation scan after a sort spends roughly SWEEP_TOTAL_MS in total,
# with the per-bar delay clamped to [SWEEP_MIN_DELAY_MS, SWEEP_MAX_DELAY_MS].
#   delay = max(MIN, min(MAX, TOTAL // n))
SWEEP_TOTAL_MS     = 3000
SWEEP_MIN_DELAY_MS = 5
SWEEP_MAX_DELAY_MS = 50
