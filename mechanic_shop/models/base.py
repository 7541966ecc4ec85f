"""Declarative base shared by all models."""

from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Largest value an Integer column holds on PostgreSQL (int4)
INT_MAX = 2**31 - 1
