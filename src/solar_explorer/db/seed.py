"""Seed data for the planets table.

Radius is relative to Earth; distance is the mean orbital distance in AU.
"""

PLANETS: list[dict] = [
    {
        "id": "mercury",
        "name": "Mercury",
        "position": 1,
        "radius": 0.383,
        "distance_au": 0.39,
        "color": "#9e9e9e",
        "summary": "The smallest planet and the closest to the Sun, with almost no atmosphere.",
    },
    {
        "id": "venus",
        "name": "Venus",
        "position": 2,
        "radius": 0.949,
        "distance_au": 0.72,
        "color": "#e8cda2",
        "summary": "Wrapped in thick carbon dioxide clouds, Venus is the hottest planet.",
    },
    {
        "id": "earth",
        "name": "Earth",
        "position": 3,
        "radius": 1.0,
        "distance_au": 1.0,
        "color": "#2f6ee2",
        "summary": "Our home, the only known world with liquid water on its surface and life.",
    },
    {
        "id": "mars",
        "name": "Mars",
        "position": 4,
        "radius": 0.532,
        "distance_au": 1.52,
        "color": "#c1440e",
        "summary": "The red planet, with iron-oxide dust, giant volcanoes and polar ice caps.",
    },
    {
        "id": "jupiter",
        "name": "Jupiter",
        "position": 5,
        "radius": 11.21,
        "distance_au": 5.2,
        "color": "#d8ca9d",
        "summary": "The largest planet, a gas giant famous for its Great Red Spot storm.",
    },
    {
        "id": "saturn",
        "name": "Saturn",
        "position": 6,
        "radius": 9.45,
        "distance_au": 9.58,
        "color": "#e3c16f",
        "summary": "A gas giant with the most spectacular ring system in the Solar System.",
    },
    {
        "id": "uranus",
        "name": "Uranus",
        "position": 7,
        "radius": 4.01,
        "distance_au": 19.2,
        "color": "#7de3f4",
        "summary": "An ice giant that rotates on its side, tilted almost 98 degrees.",
    },
    {
        "id": "neptune",
        "name": "Neptune",
        "position": 8,
        "radius": 3.88,
        "distance_au": 30.05,
        "color": "#3f54ba",
        "summary": "The windiest planet, a deep-blue ice giant at the edge of the planets.",
    },
]
