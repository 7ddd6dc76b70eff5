"""
regform - rule-based registration form validation.

The core engine evaluates ordered per-field rule chains against a form
snapshot; the adapter layer tracks visual field state around it.
"""

__version__ = "0.1.0"
