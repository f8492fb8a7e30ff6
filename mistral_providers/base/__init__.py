"""Provider-agnostic base layer (errors, logging, models, streaming, HTTP)."""
