"""Derivation core: domain, interfaces, services and configuration."""
