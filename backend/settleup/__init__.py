"""SettleUp group balance and debt simplification engine."""
