"""
Design-specific analysis components.

- `two_group`: two independent groups (program vs. control)
"""
