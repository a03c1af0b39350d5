"""Time attendance package.

Organized by feature modules (users, timelogs, shifts, geo, reports) with a thin
Flask JSON controller layer over service/repository layers.
"""
