"""Pydantic request/response models for the Blade Stock API."""
