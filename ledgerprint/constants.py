"""Constants used throughout the application."""

import pandas as pd
from io import StringIO

JOURNAL_SCHEMA_CSV = """
    column,              dtype,                mandatory,       id
    journal,             string[python],       False,         True
    id,                  string[python],       True,          True
    date,                string[python],       False,        False
    state,               string[python],       False,        False
    description,         string[python],       False,        False
    account,             string[python],       True,         False
    commodity,           string[python],       False,        False
    amount,              object,               False,        False
"""
JOURNAL_SCHEMA = pd.read_csv(StringIO(JOURNAL_SCHEMA_CSV), skipinitialspace=True)

POSTING_SCHEMA_CSV = """
    column,              dtype,                mandatory,       id
    account,             string[python],       True,          True
    commodity,           string[python],       True,          True
    amount,              object,               True,         False
"""
POSTING_SCHEMA = pd.read_csv(StringIO(POSTING_SCHEMA_CSV), skipinitialspace=True)

# Spacing inserted wherever two register columns meet
WIDTH_OFFSET = 4

DEFAULT_MAX_DECIMAL_PLACES = 8

DEFAULT_CONFIGURATION = {
    "color": False,
    "max_decimal_places": DEFAULT_MAX_DECIMAL_PLACES,
}

ANSI_RED = "\x1b[31m"
ANSI_RESET = "\x1b[0m"
