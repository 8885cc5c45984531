"""Filter vocabulary for the marketplace browse screens.

Values are the exact strings shown as filter chips and stored on listings.
"""

INDUSTRIES: tuple[str, ...] = (
    "Food & Beverage", "Retail", "Tourism", "Hospitality", "Services", "Office",
    "Healthcare", "Marketing", "Accounting", "Real Estate", "Insurance", "Creative",
    "Tech", "Construction", "Manufacturing", "Automotive", "HVAC", "Electrical",
    "Plumbing", "Solar", "Logistics", "Agriculture", "Ranching", "Fishing", "Marine",
)

JOB_TYPES: tuple[str, ...] = (
    "Full-time", "Part-time", "Contract", "Seasonal", "Freelance", "Commission",
)

LOCATIONS: tuple[str, ...] = (
    "Honolulu, HI", "Kailua, HI", "Kapolei, HI", "Pearl City, HI", "Aiea, HI",
    "Ewa Beach, HI", "Waipahu, HI", "Waikiki, HI", "Haleiwa, HI", "Kaneohe, HI",
    "Hilo, HI", "Kailua-Kona, HI", "Kona, HI", "Waimea, HI", "Kihei, HI",
    "Wailea, HI", "Lahaina, HI", "Wailuku, HI", "Kahului, HI", "Makawao, HI",
    "Pukalani, HI", "Lihue, HI", "Kapaa, HI", "Hanalei, HI", "Poipu, HI",
)

JOB_PAY_RANGES: tuple[str, ...] = (
    "$15-20/hr", "$20-25/hr", "$25-30/hr", "$30-35/hr", "$35-40/hr", "$40+/hr",
    "$30-40k/year", "$40-50k/year", "$50-60k/year", "$60k+/year", "Commission-based",
)

TARGET_PAY_RANGES: tuple[str, ...] = JOB_PAY_RANGES[:-1]

SKILLS: tuple[str, ...] = (
    "Customer Service", "Sales", "Leadership", "Management", "Bilingual", "Cooking",
    "Bartending", "Hospitality", "Retail", "Inventory Management", "Cash Handling",
    "POS Systems", "Administrative", "Office Management", "Data Entry", "QuickBooks",
    "Microsoft Office", "Bookkeeping", "Marketing", "Social Media", "Graphic Design",
    "Adobe Creative Suite", "Photography", "Video Production", "Web Development",
    "React", "JavaScript", "TypeScript", "Construction", "Carpentry", "Electrical",
    "Plumbing", "HVAC", "Welding", "Mechanic", "Auto Repair", "Landscaping",
    "Equipment Operation", "Forklift Certified", "CDL License", "Nursing",
    "Medical", "Dental", "First Aid/CPR", "Lifeguard", "Teaching", "Childcare",
    "Tour Guide", "Ocean Safety",
)

# Bucket labels; boundaries live in pipeline.matcher.
EXPERIENCE_LEVELS: tuple[str, ...] = ("0-2 years", "2-5 years", "5-10 years", "10+ years")

# Ascending rank order. A selected level acts as a floor.
EDUCATION_LEVELS: tuple[str, ...] = (
    "High School",
    "Vocational Training",
    "Associate Degree",
    "Bachelor's Degree",
    "Master's Degree",
    "Doctorate",
)
