"""Black Rabbit: seeded murder-mystery cases, interrogation rules and a panel puzzle."""

__version__ = "0.1.0"
