"""wot — CLI-обёртка над Allure TestOps (WrapperOverTestops)."""

__version__ = "0.1.0"
