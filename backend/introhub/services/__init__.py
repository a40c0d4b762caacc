"""Services — imperative shell: IO around the pure rules in introhub.core."""
