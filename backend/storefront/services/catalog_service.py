"""League, team and delivery price reads plus their admin writes."""

import logging
import re
import uuid
from collections import Counter
from typing import Optional

from storefront.data.teams import (
    STATIC_TEAMS,
    TEAMS_BY_SPORT,
    find_generated_product,
    find_static_team,
    generate_team_products,
)
from storefront.database.mongodb import (
    catalog_repository,
    delivery_price_repository,
    product_repository,
)
from storefront.database.repositories import (
    CatalogRepository,
    DeliveryPriceRepository,
    ProductRepository,
)
from storefront.exceptions import LeagueNotFoundError, ProductNotFoundError, TeamNotFoundError
from storefront.models.delivery import DeliveryPrice
from storefront.models.league import (
    CustomLeague,
    CustomLeagueCreate,
    CustomTeamCreate,
    LeagueSummary,
    Team,
    TeamLeagueLink,
)
from storefront.models.product import Product
from storefront.services.league_matcher import matches

logger = logging.getLogger(__name__)


def slugify(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


class CatalogService:
    """Catalog reads and admin catalog management."""

    def __init__(
        self,
        catalog: Optional[CatalogRepository] = None,
        products: Optional[ProductRepository] = None,
        delivery_prices: Optional[DeliveryPriceRepository] = None,
    ) -> None:
        self.catalog = catalog or catalog_repository
        self.products = products or product_repository
        self.delivery_prices = delivery_prices or delivery_price_repository

    # ── Leagues ──────────────────────────────────────────────────────────────

    @staticmethod
    def _league_for_static_team(
        team: Team, leagues: list[CustomLeague], links: dict[str, str]
    ) -> Optional[str]:
        """Stored link first, fuzzy match only for teams not yet linked."""
        if team.id in links:
            return links[team.id]
        for league in leagues:
            if matches(team.league, league.name):
                return league.id
        return None

    async def list_leagues(self) -> list[LeagueSummary]:
        """Custom leagues with team counts, followed by static leagues no custom league covers."""
        leagues = await self.catalog.list_leagues()
        custom_teams = await self.catalog.list_custom_teams()
        links = {link.teamId: link.leagueId for link in await self.catalog.list_team_links()}

        counts: Counter[str] = Counter(team.leagueId for team in custom_teams if team.leagueId)
        covered_labels: set[str] = set()
        for team in STATIC_TEAMS:
            league_id = self._league_for_static_team(team, leagues, links)
            if league_id is not None:
                counts[league_id] += 1
                covered_labels.add(team.league)

        summaries = [
            LeagueSummary(
                id=league.id,
                name=league.name,
                sport=league.sport,
                logoUrl=league.logoUrl,
                teamCount=counts.get(league.id, 0),
                source="custom",
            )
            for league in leagues
        ]

        static_counts: Counter[str] = Counter(team.league for team in STATIC_TEAMS)
        sports = {team.league: team.sport for team in STATIC_TEAMS}
        for label, count in static_counts.items():
            if label in covered_labels:
                continue
            summaries.append(
                LeagueSummary(
                    id=slugify(label),
                    name=label,
                    sport=sports[label],
                    teamCount=count,
                    source="static",
                )
            )
        return summaries

    async def create_league(self, request: CustomLeagueCreate) -> CustomLeague:
        league = CustomLeague(id=uuid.uuid4().hex, **request.model_dump())
        await self.catalog.create_league(league)
        logger.info("Custom league created: %s (%s)", league.name, league.id)
        return league

    async def list_custom_leagues(self) -> list[CustomLeague]:
        return await self.catalog.list_leagues()

    async def delete_league(self, league_id: str) -> None:
        if not await self.catalog.delete_league(league_id):
            raise LeagueNotFoundError(league_id)
        unlinked = await self.catalog.delete_team_links(league_id)
        logger.info("Custom league deleted: %s (%d team links removed)", league_id, unlinked)

    # ── Teams ────────────────────────────────────────────────────────────────

    async def list_teams(self, sport: Optional[str] = None) -> list[Team]:
        """Static teams (with their stored league links) plus custom teams."""
        links = {link.teamId: link.leagueId for link in await self.catalog.list_team_links()}
        static = TEAMS_BY_SPORT.get(sport, []) if sport else STATIC_TEAMS
        teams = [
            team.model_copy(update={"leagueId": links[team.id]}) if team.id in links else team
            for team in static
        ]
        custom = await self.catalog.list_custom_teams()
        teams.extend(team for team in custom if not sport or team.sport == sport)
        return teams

    async def get_team(self, team_id: str) -> tuple[Team, list[Product]]:
        """Look up a static or custom team with its products.

        Static teams list stored products first, then generated placeholders
        whose ids are not already taken.
        """
        team = find_static_team(team_id)
        if team is not None:
            stored = await self.products.list_by_team(team_id)
            stored_ids = {product.id for product in stored}
            generated = [p for p in generate_team_products(team) if p.id not in stored_ids]
            return team, stored + generated

        team = await self.catalog.get_custom_team(team_id)
        if team is None:
            raise TeamNotFoundError(team_id)
        return team, await self.products.list_by_team(team_id)

    async def get_product(self, product_id: str) -> Product:
        """Stored product, else a generated placeholder for a static team."""
        product = await self.products.get(product_id)
        if product is None:
            product = find_generated_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def create_custom_team(self, request: CustomTeamCreate) -> Team:
        """Create a custom team under an existing league."""
        league = await self.catalog.get_league(request.leagueId)
        if league is None:
            raise LeagueNotFoundError(request.leagueId)

        team = Team(
            id=uuid.uuid4().hex,
            name=request.name,
            league=league.name,
            leagueId=league.id,
            logo=request.logoUrl,
            sport=request.sport or league.sport,
            source="custom",
        )
        await self.catalog.create_custom_team(team)
        logger.info("Custom team created: %s in %s", team.name, league.name)
        return team

    async def link_static_teams(self) -> tuple[list[TeamLeagueLink], list[str]]:
        """Persist a league link for every static team that fuzzy-matches a custom league.

        Returns:
            Tuple of (links written, ids of teams left unmatched)
        """
        leagues = await self.catalog.list_leagues()
        links: list[TeamLeagueLink] = []
        unmatched: list[str] = []
        for team in STATIC_TEAMS:
            league = next((lg for lg in leagues if matches(team.league, lg.name)), None)
            if league is None:
                unmatched.append(team.id)
            else:
                links.append(TeamLeagueLink(teamId=team.id, leagueId=league.id))

        if links:
            await self.catalog.save_team_links(links)
        logger.info("Linked %d static teams, %d unmatched", len(links), len(unmatched))
        return links, unmatched

    # ── Delivery prices ──────────────────────────────────────────────────────

    async def get_delivery_price(self, location: str) -> Optional[DeliveryPrice]:
        """Look up the delivery fee for a location. None when unknown."""
        return await self.delivery_prices.get(location.strip())

    async def list_delivery_prices(self) -> list[DeliveryPrice]:
        return await self.delivery_prices.list_all()

    async def upsert_delivery_price(self, price: DeliveryPrice) -> DeliveryPrice:
        price = price.model_copy(update={"location": price.location.strip()})
        saved = await self.delivery_prices.upsert(price)
        logger.info("Delivery price for %s set to %.2f", saved.location, saved.price)
        return saved


# Global catalog service instance
catalog_service = CatalogService()
