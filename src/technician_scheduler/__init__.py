"""Technician Scheduler package.

Feature modules (technicians, projects, memberships, attendance, assignments,
days, reports) each carry their own model/repository/service layers; the Flask
controllers on top are thin adapters over the services.
"""
