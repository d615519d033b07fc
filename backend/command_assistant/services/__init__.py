"""
Services package: provider access, command generation and the assistant operations.
"""
