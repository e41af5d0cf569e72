"""
Game, environment and window configuration
"""

# Core session parameters (GameSession keyword arguments)
GAME_CONFIG = {
    "width": 800,
    "height": 600,
    "tick_rate": 60,
    "particle_capacity": 500,
    "star_count": 100,
}

# ==============================================================================
# GYMNASIUM ENVIRONMENT
# ==============================================================================

ENV_CONFIG = {
    # "render_mode": None,  # set per run; "human" opens an Arcade window
    "width": 800,
    "height": 600,
    "tick_rate": 60,
    "max_steps": 3600,  # 60 seconds at 60 ticks/sec
    "k_enemies": 5,
    "m_bullets": 5,
    "character": "nova",
    "particle_capacity": 200,  # particles are cosmetic; keep headless runs light
}

# Reward shaping for ShooterEnv
REWARD_CONFIG = {
    "name": "baseline",
    "R_SCORE": 0.01,      # Per point scored (basic kill = 10 points)
    "R_PICKUP": 0.5,      # Per powerup collected
    "R_DAMAGE": 1.0,      # Penalty multiplier for damage / max health
    "R_LIFE": 2.0,        # Penalty per life lost
    "R_TIME": 0.001,      # Survival bonus per tick
    "R_GAME_OVER": 5.0,   # Game over penalty
}

# ==============================================================================
# INTERACTIVE WINDOW
# ==============================================================================

WINDOW_CONFIG = {
    "title": "NovaStrike",
    "character": "nova",
    "sound": True,
}

# Scripted input used by headless runs: strafe back and forth while firing
HEADLESS_CONFIG = {
    "ticks": 3600,
    "strafe_period": 120,  # ticks per left/right sweep
}
