"""Forward/reverse record synchronization engine."""
