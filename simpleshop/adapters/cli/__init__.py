"""Command-line interface for the SimpleShop demo.

Maps shell commands onto the cart, session and export driving ports.
"""
