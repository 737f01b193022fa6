"""Authorization engine - resolver, cache and guard."""
