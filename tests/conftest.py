"""Root conftest — shared test configuration."""

import os

# Keep the developer's shell settings out of the tests
os.environ["CALC_MAX_LINE_LENGTH"] = "256"
os.environ["CALC_MAX_DEPTH"] = "64"
os.environ["CALC_PRECISION"] = "2"
os.environ["CALC_LOG_MODE"] = "off"
