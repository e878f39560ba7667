# Built-in candidates used only when CATALOG_FALLBACK_ENABLED is set and the
# catalog cannot answer. Same record shape as the catalog's /movie docs.
FALLBACK_MOVIES = [
    {
        "id": 535341,
        "name": "1+1",
        "alternativeName": "Intouchables",
        "enName": None,
        "year": 2011,
        "rating": {"kp": 8.82, "imdb": 8.5},
        "votes": {"kp": 1820000, "imdb": 930000},
        "genres": [{"name": "драма"}, {"name": "комедия"}, {"name": "биография"}],
        "poster": None,
        "description": "Пострадав в результате несчастного случая, богатый аристократ Филипп нанимает в помощники человека, который менее всего подходит для этой работы, — молодого жителя предместья Дрисса, только что освободившегося из тюрьмы.",
    },
    {
        "id": 326,
        "name": "Побег из Шоушенка",
        "alternativeName": "The Shawshank Redemption",
        "enName": None,
        "year": 1994,
        "rating": {"kp": 9.11, "imdb": 9.3},
        "votes": {"kp": 1100000, "imdb": 2900000},
        "genres": [{"name": "драма"}],
        "poster": None,
        "description": "Бухгалтер Энди Дюфрейн обвинён в убийстве собственной жены и её любовника. Оказавшись в тюрьме под названием Шоушенк, он сталкивается с жестокостью и беззаконием, царящими по обе стороны решётки.",
    },
    {
        "id": 447301,
        "name": "Начало",
        "alternativeName": "Inception",
        "enName": None,
        "year": 2010,
        "rating": {"kp": 8.67, "imdb": 8.8},
        "votes": {"kp": 1000000, "imdb": 2500000},
        "genres": [{"name": "фантастика"}, {"name": "боевик"}, {"name": "триллер"}, {"name": "драма"}, {"name": "детектив"}],
        "poster": None,
        "description": "Кобб — талантливый вор, лучший из лучших в опасном искусстве извлечения: он крадет ценные секреты из глубин подсознания во время сна, когда человеческий разум наиболее уязвим.",
    },
    {
        "id": 370,
        "name": "Амели",
        "alternativeName": "Le fabuleux destin d'Amélie Poulain",
        "enName": "Amélie",
        "year": 2001,
        "rating": {"kp": 7.92, "imdb": 8.3},
        "votes": {"kp": 440000, "imdb": 790000},
        "genres": [{"name": "мелодрама"}, {"name": "комедия"}],
        "poster": None,
        "description": "Амели живёт в Париже и работает официанткой в кафе. Найдя в своей квартире тайник с детскими сокровищами, она решает вернуть их владельцу и начинает тайно помогать окружающим.",
    },
    {
        "id": 370005,
        "name": "ВАЛЛ·И",
        "alternativeName": "WALL·E",
        "enName": None,
        "year": 2008,
        "rating": {"kp": 8.04, "imdb": 8.4},
        "votes": {"kp": 560000, "imdb": 1200000},
        "genres": [{"name": "мультфильм"}, {"name": "фантастика"}, {"name": "семейный"}],
        "poster": None,
        "description": "Робот ВАЛЛ·И остался один на опустевшей Земле и продолжает собирать мусор, пока однажды к нему не прилетает разведчица ЕВА.",
    },
    {
        "id": 1008444,
        "name": "Лето",
        "alternativeName": None,
        "enName": "Leto",
        "year": 2018,
        "rating": {"kp": 7.1, "imdb": 7.4},
        "votes": {"kp": 4200, "imdb": 12000},
        "genres": [{"name": "драма"}, {"name": "музыка"}, {"name": "биография"}],
        "poster": None,
        "description": None,
    },
    {
        "id": 1115471,
        "name": "Человек, который удивил всех",
        "alternativeName": None,
        "enName": "The Man Who Surprised Everyone",
        "year": 2018,
        "rating": {"kp": 7.25, "imdb": 7.3},
        "votes": {"kp": 3100, "imdb": 4500},
        "genres": [{"name": "драма"}],
        "poster": None,
        "description": "Егерь Егор узнаёт, что смертельно болен. Вспомнив старую легенду, он решается на странный поступок, который меняет его жизнь и жизнь его семьи.",
    },
    {
        "id": 4374,
        "name": "Пираты Карибского моря: Проклятие Черной жемчужины",
        "alternativeName": "Pirates of the Caribbean: The Curse of the Black Pearl",
        "enName": None,
        "year": 2003,
        "rating": {"kp": 8.34, "imdb": 8.1},
        "votes": {"kp": 690000, "imdb": 1200000},
        "genres": [{"name": "фэнтези"}, {"name": "боевик"}, {"name": "приключения"}, {"name": "комедия"}],
        "poster": None,
        "description": "Жизнь харизматичного авантюриста, капитана Джека Воробья, полная увлекательных приключений, резко меняется, когда его заклятый враг капитан Барбосса похищает корабль Джека.",
    },
]
