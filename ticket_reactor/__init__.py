"""Ticket lifecycle reactions for suspended workflow executions."""
