"""Infrastructure layer: HTTP clients for the Supabase data store."""
