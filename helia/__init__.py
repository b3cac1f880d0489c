"""Request handlers, pagination, dialogs and value formatting for a bookkeeping web application."""

__version__ = "0.1.0"