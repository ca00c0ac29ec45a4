"""
Deterministic normalization rules.

Every constant the intake pipeline and the page depend on lives here.
"""

import os

PLACEHOLDER = "—"  # em-dash, source convention for "missing"
MISSING_TOOLTIP = "Information unavailable!"

FALLBACK_HEADER_PREFIX = "Column"

ALLOWED_EXTENSION = ".csv"
CANDIDATE_DELIMITERS = [",", ";", "\t", "|"]
SNIFF_SAMPLE_SIZE = 4096

MSG_INVALID_EXTENSION = "Please upload a valid .csv file."
MSG_TOKENIZER_FAILURE = "Could not parse CSV file."
MSG_EMPTY_INPUT = "CSV file contains no valid data."
MSG_NO_HEADER = "Could not find valid headers in CSV."
MSG_PARSER_FAILURE_PREFIX = "CSV parsing failed: "

PAGE_TITLE = "Daylight Healthcare"

LOG_LEVEL = os.environ.get("CSVTABLE_LOG_LEVEL", "INFO").upper()
if LOG_LEVEL not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
    LOG_LEVEL = "INFO"
