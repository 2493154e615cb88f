# ============================================================================
# src/prescription_ocr/constants/medication_db.py
# ============================================================================
"""
Medication vocabularies used by the name-matching layers.

Plain lowercase term lists; extractors/patterns.py compiles them into
word-bounded, case-insensitive alternations. Adding a vocabulary here (or
registering one at runtime) never requires touching the scorer.
"""

# Well-known generic and brand names, highest-trust layer
KNOWN_MEDICINES = (
    # Cardiovascular
    "lisinopril", "atorvastatin", "amlodipine", "simvastatin", "losartan",
    "hydrochlorothiazide", "warfarin", "digoxin", "furosemide",
    "lipitor", "crestor", "norvasc", "prinivil", "zestril", "zocor",
    "cozaar", "microzide",
    # Diabetes / thyroid
    "metformin", "glucophage", "levothyroxine", "synthroid",
    # GI
    "omeprazole", "pantoprazole", "esomeprazole", "ranitidine", "famotidine",
    "nexium", "prilosec", "protonix", "prevacid", "pepcid",
    # Pain / anti-inflammatory
    "aspirin", "ibuprofen", "acetaminophen", "naproxen", "prednisone",
    "tylenol", "advil", "motrin", "aleve",
    # Neuro / psychiatric
    "gabapentin", "sertraline", "escitalopram", "duloxetine", "trazodone",
    "clonazepam", "lorazepam", "alprazolam", "zolpidem", "citalopram",
    "fluoxetine", "paroxetine", "venlafaxine", "bupropion", "mirtazapine",
    "quetiapine", "aripiprazole", "risperidone", "olanzapine", "haloperidol",
    "neurontin", "zoloft", "lexapro", "cymbalta", "xanax", "ativan",
    "klonopin", "ambien", "celexa", "prozac", "paxil", "effexor",
    "wellbutrin", "remeron", "seroquel", "abilify", "risperdal", "zyprexa",
    "haldol",
)

# Vitamins, minerals and common OTC supplements
SUPPLEMENT_TERMS = (
    "vitamin", "calcium", "iron", "magnesium", "zinc", "omega",
    "multivitamin", "fish oil", "glucosamine", "coq10", "biotin",
    "folic acid", "b12", "d3", "b6", "thiamine", "riboflavin", "niacin",
    "pantothenic", "pyridoxine", "cobalamin", "ascorbic", "tocopherol",
    "phylloquinone", "choline",
)

# Word endings common to drug names (-pril ACE inhibitors, -sartan ARBs, ...)
MEDICINE_SUFFIXES = (
    "ol", "in", "ine", "ate", "ide", "oxin", "mycin", "cillin", "nacin",
    "pril", "sartan", "pine", "zole", "tinib", "mab",
)

# A source line containing any of these reads like a prescription instruction
PRESCRIPTION_CONTEXT_KEYWORDS = (
    "take", "tablet", "tablets", "capsule", "capsules", "pill", "pills",
    "medication", "rx", "prescription", "dose", "daily", "twice", "once",
)

# Strength units that also count as context when glued to a number ("81mg")
CONTEXT_UNITS = ("mg", "mcg")

# Instruction and form words the heuristic layers (suffix, capitalized,
# name+dosage) would otherwise report as medicine names. Never applied to the
# vocabularies above.
NON_MEDICINE_WORDS = frozenset({
    "take", "tablet", "tablets", "capsule", "capsules", "pill", "pills",
    "daily", "dose", "doses", "refill", "refills", "sig", "disp", "dispense",
    "quantity", "qty", "signature", "date", "with", "before", "after",
    "meals", "food", "water", "morning", "evening", "night", "bedtime",
    "once", "twice", "every", "hours", "days", "weeks", "oral", "mouth",
    "apply", "inhale", "inject", "needed", "directed", "substitution",
    "generic", "permitted", "medicine", "medicines", "medication",
    # Function words that precede a strength ("and 5mg", "for 10 days")
    "and", "for", "the", "per", "each", "then", "also", "plus", "from",
    "into", "over", "until", "than", "use", "give", "max", "total",
    # Plain English words that happen to end in a drug suffix
    "again", "within", "begin", "certain", "contain", "maintain", "remain",
    "plain", "late", "separate", "immediate", "alternate", "side",
    "inside", "outside", "routine", "urine", "fine", "line", "online",
    "control", "protocol", "alcohol", "chocolate", "protein", "skin",
})
