"""Preloaded course catalog."""

from typing import Any


CATEGORIES = ["Technology", "Languages", "Business", "Design"]
LEVELS = ["Beginner", "Intermediate", "Advanced"]

COURSES: list[dict[str, Any]] = [
    {
        "id": 1,
        "title": "React from Basics to Advanced",
        "description": "Learn React from the fundamentals up to advanced techniques",
        "category": "Technology",
        "level": "Beginner",
        "instructor": "Nguyen Van A",
        "duration": "40 hours",
        "rating": 4.8,
        "reviews": 156,
        "price": 1500000,
        "image": "https://images.unsplash.com/photo-1633356122544-f134324a6cee?w=500",
        "lessons": [
            {"id": 1, "title": "Introduction to React", "duration": "30 min"},
            {"id": 2, "title": "Components and Props", "duration": "45 min"},
            {"id": 3, "title": "State and Lifecycle", "duration": "60 min"},
            {"id": 4, "title": "Event Handling", "duration": "40 min"},
            {"id": 5, "title": "Hooks Fundamentals", "duration": "90 min"},
        ],
    },
    {
        "id": 2,
        "title": "JavaScript ES6+ Complete Guide",
        "description": "Master modern JavaScript with ES6, ES7, ES8 and the newest features",
        "category": "Technology",
        "level": "Intermediate",
        "instructor": "Tran Thi B",
        "duration": "35 hours",
        "rating": 4.9,
        "reviews": 203,
        "price": 1200000,
        "image": "https://images.unsplash.com/photo-1627398242454-45a1465c2479?w=500",
        "lessons": [
            {"id": 1, "title": "Let, Const and Arrow Functions", "duration": "25 min"},
            {"id": 2, "title": "Destructuring and Spread", "duration": "35 min"},
            {"id": 3, "title": "Promises and Async/Await", "duration": "50 min"},
            {"id": 4, "title": "Classes and Modules", "duration": "40 min"},
        ],
    },
    {
        "id": 3,
        "title": "Node.js Backend Development",
        "description": "Build robust backend applications with Node.js and Express",
        "category": "Technology",
        "level": "Advanced",
        "instructor": "Le Van C",
        "duration": "50 hours",
        "rating": 4.7,
        "reviews": 89,
        "price": 2000000,
        "image": "https://images.unsplash.com/photo-1558494949-ef010cbdcc31?w=500",
        "lessons": [
            {"id": 1, "title": "Setting up Node.js", "duration": "20 min"},
            {"id": 2, "title": "Express.js Framework", "duration": "60 min"},
            {"id": 3, "title": "Database Integration", "duration": "75 min"},
            {"id": 4, "title": "Authentication & Authorization", "duration": "90 min"},
        ],
    },
    {
        "id": 4,
        "title": "Everyday English Conversation",
        "description": "Learn practical everyday English conversation",
        "category": "Languages",
        "level": "Beginner",
        "instructor": "Ms. Sarah Johnson",
        "duration": "30 hours",
        "rating": 4.6,
        "reviews": 312,
        "price": 800000,
        "image": "https://images.unsplash.com/photo-1434030216411-0b793f4b4173?w=500",
        "lessons": [
            {"id": 1, "title": "Greetings and Self Introduction", "duration": "25 min"},
            {"id": 2, "title": "Daily Conversations", "duration": "30 min"},
            {"id": 3, "title": "Shopping and Ordering Food", "duration": "35 min"},
            {"id": 4, "title": "Asking for Directions", "duration": "20 min"},
        ],
    },
    {
        "id": 5,
        "title": "Digital Marketing Strategy",
        "description": "Effective digital marketing strategy for modern businesses",
        "category": "Business",
        "level": "Intermediate",
        "instructor": "Pham Van D",
        "duration": "25 hours",
        "rating": 4.5,
        "reviews": 167,
        "price": 1000000,
        "image": "https://images.unsplash.com/photo-1460925895917-afdab827c52f?w=500",
        "lessons": [
            {"id": 1, "title": "Digital Marketing Overview", "duration": "40 min"},
            {"id": 2, "title": "Social Media Marketing", "duration": "55 min"},
            {"id": 3, "title": "Email Marketing", "duration": "45 min"},
            {"id": 4, "title": "SEO & Content Marketing", "duration": "70 min"},
        ],
    },
    {
        "id": 6,
        "title": "Photoshop for Beginners",
        "description": "Learn Adobe Photoshop from the basics to proficiency",
        "category": "Design",
        "level": "Beginner",
        "instructor": "Ngo Thi E",
        "duration": "20 hours",
        "rating": 4.4,
        "reviews": 198,
        "price": 700000,
        "image": "https://images.unsplash.com/photo-1609557927087-f9cf8e88de18?w=500",
        "lessons": [
            {"id": 1, "title": "Interface and Basic Tools", "duration": "30 min"},
            {"id": 2, "title": "Layers and Selections", "duration": "45 min"},
            {"id": 3, "title": "Color Correction", "duration": "40 min"},
            {"id": 4, "title": "Retouching and Effects", "duration": "60 min"},
        ],
    },
]
