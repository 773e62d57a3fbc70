"""Rename a Dart/Flutter project: manifest, package imports and package cache."""

__version__ = "0.1.0"
