"""Interop with other graph libraries. Each adapter imports its backend lazily."""
