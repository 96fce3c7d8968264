"""Tabledeck core: data model, command language and the state owner."""
