"""Messagely: user and message storage."""
