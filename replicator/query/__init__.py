"""Preset report queries."""