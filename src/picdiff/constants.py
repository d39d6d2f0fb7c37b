# -*- coding: utf-8 -*-
"""Application constants."""

APP_NAME = "picdiff"

DEFAULT_SETTINGS_FILE = "picdiff.json"

COMPARE_MODES = ("exact", "threshold", "count")
