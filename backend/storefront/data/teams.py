"""Static team list compiled into the storefront."""

from storefront.models.league import Team
from storefront.models.product import Product, ProductColor

_LOGO_BASE = "https://logos-world.net/wp-content/uploads/2020/06"


def _team(team_id: str, name: str, league: str, country: str | None, sport: str) -> Team:
    logo = f"{_LOGO_BASE}/{name.replace(' ', '-').replace('&', '').replace('--', '-')}-Logo.png"
    return Team(id=team_id, name=name, league=league, country=country, logo=logo, sport=sport)


FOOTBALL_TEAMS: list[Team] = [
    # Premier League
    _team("man-utd", "Manchester United", "Premier League", "England", "football"),
    _team("man-city", "Manchester City", "Premier League", "England", "football"),
    _team("liverpool", "Liverpool", "Premier League", "England", "football"),
    _team("chelsea", "Chelsea", "Premier League", "England", "football"),
    _team("arsenal", "Arsenal", "Premier League", "England", "football"),
    _team("tottenham", "Tottenham Hotspur", "Premier League", "England", "football"),
    _team("newcastle", "Newcastle United", "Premier League", "England", "football"),
    _team("aston-villa", "Aston Villa", "Premier League", "England", "football"),
    # La Liga
    _team("real-madrid", "Real Madrid", "La Liga", "Spain", "football"),
    _team("barcelona", "Barcelona", "La Liga", "Spain", "football"),
    _team("atletico", "Atletico Madrid", "La Liga", "Spain", "football"),
    _team("sevilla", "Sevilla", "La Liga", "Spain", "football"),
    # Serie A
    _team("juventus", "Juventus", "Serie A", "Italy", "football"),
    _team("milan", "AC Milan", "Serie A", "Italy", "football"),
    _team("inter", "Inter Milan", "Serie A", "Italy", "football"),
    _team("napoli", "Napoli", "Serie A", "Italy", "football"),
    # Bundesliga
    _team("bayern", "Bayern Munich", "Bundesliga", "Germany", "football"),
    _team("dortmund", "Borussia Dortmund", "Bundesliga", "Germany", "football"),
    _team("leverkusen", "Bayer Leverkusen", "Bundesliga", "Germany", "football"),
    # Ligue 1
    _team("psg", "Paris Saint-Germain", "Ligue 1", "France", "football"),
    _team("marseille", "Marseille", "Ligue 1", "France", "football"),
    _team("lyon", "Lyon", "Ligue 1", "France", "football"),
    # Other European
    _team("ajax", "Ajax", "Eredivisie", "Netherlands", "football"),
    _team("porto", "Porto", "Primeira Liga", "Portugal", "football"),
    _team("benfica", "Benfica", "Primeira Liga", "Portugal", "football"),
    _team("celtic", "Celtic", "Scottish Premiership", "Scotland", "football"),
    _team("rangers", "Rangers", "Scottish Premiership", "Scotland", "football"),
    _team("galatasaray", "Galatasaray", "Süper Lig", "Turkey", "football"),
    _team("fenerbahce", "Fenerbahce", "Süper Lig", "Turkey", "football"),
    # Ghana Premier League
    _team("hearts-of-oak", "Accra Hearts of Oak", "Ghana Premier League", "Ghana", "football"),
    _team("asante-kotoko", "Asante Kotoko", "Ghana Premier League", "Ghana", "football"),
    _team("medeama", "Medeama", "Ghana Premier League", "Ghana", "football"),
]

BASKETBALL_TEAMS: list[Team] = [
    _team("lakers", "Los Angeles Lakers", "NBA", "USA", "basketball"),
    _team("celtics", "Boston Celtics", "NBA", "USA", "basketball"),
    _team("warriors", "Golden State Warriors", "NBA", "USA", "basketball"),
    _team("bulls", "Chicago Bulls", "NBA", "USA", "basketball"),
    _team("heat", "Miami Heat", "NBA", "USA", "basketball"),
    _team("knicks", "New York Knicks", "NBA", "USA", "basketball"),
    _team("nuggets", "Denver Nuggets", "NBA", "USA", "basketball"),
    _team("bucks", "Milwaukee Bucks", "NBA", "USA", "basketball"),
]

STATIC_TEAMS: list[Team] = FOOTBALL_TEAMS + BASKETBALL_TEAMS

TEAMS_BY_SPORT: dict[str, list[Team]] = {
    "football": FOOTBALL_TEAMS,
    "basketball": BASKETBALL_TEAMS,
}


def find_static_team(team_id: str) -> Team | None:
    """Look up a static team by id."""
    return next((team for team in STATIC_TEAMS if team.id == team_id), None)


# (suffix, label, price, colors)
_TEAM_PRODUCT_TEMPLATES: list[tuple[str, str, float, list[tuple[str, str, str]]]] = [
    ("home-jersey", "Home Jersey", 89.99, [("home", "Home", "#1a1a1a")]),
    ("away-jersey", "Away Jersey", 89.99, [("away", "Away", "#ffffff")]),
    ("hoodie", "Hoodie", 69.99, [("navy", "Navy", "#1a1a1a"), ("gray", "Gray", "#6b7280")]),
    ("t-shirt", "T-Shirt", 29.99, [("white", "White", "#ffffff"), ("black", "Black", "#000000")]),
    ("cap", "Cap", 24.99, [("black", "Black", "#000000")]),
]


def generate_team_products(team: Team) -> list[Product]:
    """Build the placeholder merchandise shown on a static team's page."""
    products = []
    for suffix, label, price, colors in _TEAM_PRODUCT_TEMPLATES:
        products.append(
            Product(
                id=f"{team.id}-{suffix}",
                name=f"{team.name} {label}",
                price=price,
                stock=0,
                category=suffix,
                teamId=team.id,
                team=team.name,
                league=team.league,
                colors=[ProductColor(id=cid, name=name, hex=hex_) for cid, name, hex_ in colors],
                sizes=[] if suffix == "cap" else ["S", "M", "L", "XL"],
            )
        )
    return products


def find_generated_product(product_id: str) -> Product | None:
    """Resolve a generated team product id such as ``man-utd-home-jersey``."""
    for team in STATIC_TEAMS:
        if not product_id.startswith(f"{team.id}-"):
            continue
        for product in generate_team_products(team):
            if product.id == product_id:
                return product
    return None
