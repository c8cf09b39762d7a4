"""
Architecture-as-Code Model Service

Loads enterprise architecture models written as Pkl object declarations,
maps them onto a typed ArchiMate model (Business, Application and Technology
layers plus relationships) and validates the relationship graph.
"""

__version__ = "0.1.0"
__author__ = "Enterprise Architecture Team"
