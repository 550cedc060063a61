"""Translation engines and orchestration."""
