"""
Lead Intent Scoring Engine
==========================
A two-layer pipeline for lead qualification against an offer:
  Layer 1: Rule Scoring (role, industry fit, data completeness; max 50)
  Layer 2: AI Intent Scoring (language-model High/Medium/Low; max 50)
The combined 0-100 score maps to a final High/Medium/Low intent.
"""

__version__ = "1.0.0"
__author__ = "Lead Scoring Team"
