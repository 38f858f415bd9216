"""Host bindings for history controllers."""
