# Seeder - sample job postings for local development
