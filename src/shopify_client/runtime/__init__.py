"""
Runtime support: error model and envelope codec.
"""

from .errors import *
from .codec import encode, decode, to_payload
