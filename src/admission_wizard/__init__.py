"""
Admission Wizard - client-side engine for the school admission application wizard.
"""

__version__ = "0.1.0"
