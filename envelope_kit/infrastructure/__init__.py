"""Infrastructure Layer — concrete transport and logging implementations."""
