"""
Reponses simulees de l'API Radarr v3.

Ces fixtures sont utilisees avec respx pour simuler les appels httpx.

Reference: https://radarr.video/docs/api/
"""

# GET /api/v3/movie
RADARR_MOVIES_RESPONSE = [
    {
        "id": 10,
        "title": "Le Parrain",
        "originalTitle": "The Godfather",
        "originalLanguage": {"id": 1, "name": "English"},
        "year": 1972,
        "overview": "En 1945, a New York, les Corleone...",
        "images": [
            {"coverType": "poster", "remoteUrl": "https://artworks.example/godfather.jpg"}
        ],
        "hasFile": True,
        "movieFile": {
            "id": 900,
            "path": "/data/movies/The Godfather (1972)/The.Godfather.1972.mkv",
            "sceneName": "The.Godfather.1972.REMASTERED.1080p.BluRay.x264-SPARKS",
            "releaseGroup": "SPARKS",
            "quality": {"quality": {"id": 7, "name": "Bluray-1080p"}},
        },
    },
    {
        "id": 11,
        "title": "Film Sans Fichier",
        "year": 2024,
        "hasFile": False,
    },
]
