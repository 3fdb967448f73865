"""Pure domain core: value objects, contracts and governance decisions."""
