# File: utils/__init__.py
# Purpose: Logging and filesystem helpers
