"""
Infrastructure shared by every layer: settings, logging, the database
handle, the view cache, form parsing and the admin access gate.
"""
