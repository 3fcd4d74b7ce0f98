# API Routers
from lvlup.routers import users, habits, categories, goals, journal, timers, achievements, suggestions

__all__ = ["users", "habits", "categories", "goals", "journal", "timers", "achievements", "suggestions"]
