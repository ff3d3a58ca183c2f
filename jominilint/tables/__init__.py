"""Static tables of iterators, scope links, triggers, effects and modifs."""
