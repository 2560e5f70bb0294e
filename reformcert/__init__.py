"""reformcert — renovation work certificate deduction service."""
