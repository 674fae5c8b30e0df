from .vlconfig import VLConfig, HeaderConfig, TimescaleConfig, TimescaleUnit
from .vlmanager import VLManager
