"""Course catalog REST API: courses, users and enrollments."""
