"""
Runtime settings, read once from the environment.
"""
import os

HOST = os.environ.get('IR_CALC_HOST', '0.0.0.0')
PORT = int(os.environ.get('IR_CALC_PORT', '5001'))
LOG_LEVEL = os.environ.get('IR_CALC_LOG_LEVEL', 'INFO').upper()

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get('IR_CALC_CORS_ORIGINS', '*').split(',')
    if origin.strip()
]

# Upper bound on rows produced by one salary table request
MAX_TABLE_ROWS = int(os.environ.get('IR_CALC_MAX_TABLE_ROWS', '5000'))
