"""
browserd - Browser Automation Server

Drives real browsers (Chromium, Firefox, WebKit) on behalf of HTTP clients.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- driver: Browser engine process management (Playwright)
- session: Live browser session registry
- dispatch: Command validation, execution and result envelopes
- api: Request/response models and tool descriptors
"""

__version__ = "1.0.0"
