"""Configuration and message catalogue for the any-sms client."""

from anysms.config.messages import MessageCatalog
from anysms.config.settings import SmsSettings, get_settings

__all__ = ["MessageCatalog", "SmsSettings", "get_settings"]
