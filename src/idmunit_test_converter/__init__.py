"""Convert IdMUnit test workbooks to ``.idmunit`` JSON directories and back."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
