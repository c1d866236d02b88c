"""Export sink adapters for the cart.json download."""
