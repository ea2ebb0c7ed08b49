"""Core building blocks shared by features: settings, exceptions, pagination, database."""
