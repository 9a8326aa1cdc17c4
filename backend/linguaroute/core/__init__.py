"""Configuration, logging and telemetry"""
