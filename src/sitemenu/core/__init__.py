"""Navigation core: content access, classification and builders."""
