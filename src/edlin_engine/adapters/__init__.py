"""Front ends that host the editor engine."""
