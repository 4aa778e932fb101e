"""
Configuration
=============
Central registry for the global constants of the package.

Every constant can be overridden through an environment variable read once
at import time.

Exports:
    GROEBNER_ORDER (str): monomial order for ideal membership tests.
    ELIMINATION_ORDER (str): monomial order used to eliminate auxiliary variables.
    LOG_LEVEL (str): default level used by logging_config.setup_logging.
    LOG_FORMAT (str): record format of the package log handlers.
"""
import os

GROEBNER_ORDER: str = os.environ.get("SYMBOLIC_SCHEMES_GROEBNER_ORDER", "grevlex")

# sympy only offers lex as an elimination order
ELIMINATION_ORDER: str = "lex"

LOG_LEVEL: str = os.environ.get("SYMBOLIC_SCHEMES_LOG_LEVEL", "WARNING")
LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT: str = '%H:%M:%S'

# End of config.py
