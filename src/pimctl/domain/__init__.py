"""Pure access-control logic: item filters and domain guards."""
