"""mvcgen: schema-driven generator for layered PHP MVC applications."""

__version__ = "0.1.0"
