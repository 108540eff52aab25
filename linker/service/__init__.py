"""Use-cases composing the pure domain modules."""
