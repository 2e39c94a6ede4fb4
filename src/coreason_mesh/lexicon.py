# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_mesh

"""
Static lexicon tables shared by every mapping request.

All tables are read-only views built once at import time. Keys are lower-case;
iteration order is the declaration order below and is significant, because
matches are emitted in that order and the first match for a concept wins.
"""

from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple

# Abbreviation / colloquialism -> single MeSH heading.
MESH_SYNONYMS: Mapping[str, str] = MappingProxyType(
    {
        "tremor": "Tremor",
        "essential tremor": "Essential Tremor",
        "parkinson": "Parkinson Disease",
        "parkinsons": "Parkinson Disease",
        "parkinson's": "Parkinson Disease",
        "alzheimer": "Alzheimer Disease",
        "alzheimers": "Alzheimer Disease",
        "alzheimer's": "Alzheimer Disease",
        "men1": "Multiple Endocrine Neoplasia Type 1",
        "men 1": "Multiple Endocrine Neoplasia Type 1",
        "type 1 diabetes": "Diabetes Mellitus, Type 1",
        "type 2 diabetes": "Diabetes Mellitus, Type 2",
        "t1d": "Diabetes Mellitus, Type 1",
        "t2d": "Diabetes Mellitus, Type 2",
        "copd": "Pulmonary Disease, Chronic Obstructive",
        "adhd": "Attention Deficit Disorder with Hyperactivity",
        "add": "Attention Deficit Disorder with Hyperactivity",
        "ptsd": "Stress Disorders, Post-Traumatic",
        "ocd": "Obsessive-Compulsive Disorder",
        "ibs": "Irritable Bowel Syndrome",
        "gerd": "Gastroesophageal Reflux",
        "ra": "Arthritis, Rheumatoid",
        # Space-padded so "ms" inside other words does not match
        " ms ": "Multiple Sclerosis",
        " ms": "Multiple Sclerosis",
        "als": "Amyotrophic Lateral Sclerosis",
        "hiv": "HIV Infections",
        "aids": "Acquired Immunodeficiency Syndrome",
    }
)

# Lay phrase -> ordered candidate MeSH headings, most likely first.
LAY_TERM_MAPPINGS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        # Movement
        "hands shake": ("Tremor", "Essential Tremor"),
        "shaking hands": ("Tremor", "Essential Tremor"),
        "trembling": ("Tremor",),
        "shaky": ("Tremor",),
        # Pain
        "stomach pain": ("Abdominal Pain",),
        "stomach ache": ("Abdominal Pain",),
        "tummy pain": ("Abdominal Pain",),
        "belly pain": ("Abdominal Pain",),
        "chest pain": ("Chest Pain",),
        "headache": ("Headache", "Migraine Disorders"),
        "head pain": ("Headache",),
        "back pain": ("Back Pain", "Low Back Pain"),
        "joint pain": ("Arthralgia",),
        # Mental health
        "feeling sad": ("Depression", "Depressive Disorder"),
        "depression": ("Depressive Disorder", "Depression"),
        "anxiety": ("Anxiety Disorders", "Anxiety"),
        "nervous": ("Anxiety", "Nervousness"),
        "can't sleep": ("Sleep Initiation and Maintenance Disorders", "Insomnia"),
        "insomnia": ("Sleep Initiation and Maintenance Disorders",),
        "panic attack": ("Panic Disorder",),
        # Respiratory
        "short of breath": ("Dyspnea",),
        "shortness of breath": ("Dyspnea",),
        "hard to breathe": ("Dyspnea",),
        "breathing difficulty": ("Dyspnea",),
        "cough": ("Cough",),
        "wheezing": ("Respiratory Sounds", "Wheezing"),
        # Cardiovascular
        "heart racing": ("Tachycardia", "Palpitations"),
        "fast heartbeat": ("Tachycardia",),
        "palpitations": ("Palpitations",),
        "high blood pressure": ("Hypertension",),
        "low blood pressure": ("Hypotension",),
        # Gastrointestinal
        "nausea": ("Nausea",),
        "throwing up": ("Vomiting",),
        "vomiting": ("Vomiting",),
        "diarrhea": ("Diarrhea",),
        "constipation": ("Constipation",),
        "heartburn": ("Heartburn", "Gastroesophageal Reflux"),
        "acid reflux": ("Gastroesophageal Reflux",),
        # Neurological
        "dizzy": ("Dizziness", "Vertigo"),
        "dizziness": ("Dizziness", "Vertigo"),
        "numbness": ("Hypesthesia", "Paresthesia"),
        "tingling": ("Paresthesia",),
        "pins and needles": ("Paresthesia",),
        "memory problems": ("Memory Disorders", "Cognitive Dysfunction"),
        "forgetfulness": ("Memory Disorders",),
        "seizure": ("Seizures",),
        "convulsion": ("Seizures",),
        # Skin
        "rash": ("Exanthema", "Skin Rash"),
        "itchy skin": ("Pruritus",),
        "itching": ("Pruritus",),
        "hives": ("Urticaria",),
        # General
        "fever": ("Fever",),
        "tired": ("Fatigue",),
        "tiredness": ("Fatigue",),
        "fatigue": ("Fatigue",),
        "weakness": ("Muscle Weakness", "Asthenia"),
        "weight loss": ("Weight Loss",),
        "weight gain": ("Weight Gain",),
        "swelling": ("Edema",),
        # Common diseases in lay terms
        "diabetes": ("Diabetes Mellitus",),
        "sugar diabetes": ("Diabetes Mellitus, Type 2",),
        "cancer": ("Neoplasms",),
        "heart disease": ("Heart Diseases", "Cardiovascular Diseases"),
        "stroke": ("Stroke",),
        "arthritis": ("Arthritis",),
        "asthma": ("Asthma",),
        "allergies": ("Hypersensitivity",),
        "cold": ("Common Cold",),
        "flu": ("Influenza, Human",),
        "covid": ("COVID-19",),
        "coronavirus": ("COVID-19", "Coronavirus Infections"),
    }
)

# Words ignored when surfacing unmatched fragments.
STOP_WORDS: FrozenSet[str] = frozenset(
    {
        "the", "a", "an", "is", "are", "was", "were", "my", "i", "me",
        "when", "what", "how", "why", "have", "has", "had", "do", "does", "did", "can",
        "could", "would", "should", "will", "been", "being", "with", "for", "at", "by",
        "about", "into", "through", "during", "before", "after", "above", "below", "to",
        "from", "up", "down", "in", "out", "on", "off", "over", "under", "again", "further",
        "then", "once", "here", "there", "all", "each", "few", "more", "most", "other",
        "some", "such", "no", "nor", "not", "only", "own", "same", "so", "than", "too",
        "very", "just", "and", "but", "if", "or", "because", "as", "until", "while", "of",
        "it", "this", "that", "these", "those", "am", "really", "get", "getting", "got",
        "feel", "feeling", "like", "lot", "sometimes", "always", "often", "never",
    }
)  # fmt: skip
