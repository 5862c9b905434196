"""Game rules, AI opponents and orchestration."""
