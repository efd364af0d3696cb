"""Types, ports, configuration and the field codec."""
