"""Detection, recognition and control modules."""
