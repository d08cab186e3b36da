"""Spin admin service: live spin feeds, prize statistics, and privileged bulk delete."""
