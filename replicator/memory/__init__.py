"""Dewey semantic memory client and answers for retired memory tools."""