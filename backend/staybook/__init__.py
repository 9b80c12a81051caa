"""StayBook — property-rental reservation backend."""
