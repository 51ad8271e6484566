"""Domain models shared by the platform, the index service and the runner."""
