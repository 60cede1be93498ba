"""Configuration and filesystem helpers"""
