"""Persistence, ordering engine and use-case services"""
