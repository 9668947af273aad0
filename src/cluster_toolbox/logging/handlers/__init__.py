from .base import BaseLogHandler as BaseLogHandler
