"""InnovateHub contest platform - Backend.

A thin REST layer over four document collections:
- users (roles: admin / creator / default)
- contests
- registers (contest registrations)
- bestCreator (read-only listing)

Plus JWT issuance and Stripe payment intents for contest entry fees.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
