"""Cells, epics, sessions, git sync and cell tables."""