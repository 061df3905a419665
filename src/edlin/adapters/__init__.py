"""Hosts that embed an editing session in another front-end."""
