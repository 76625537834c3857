"""
Raw Feeding Community Client

This is the main entry point for the community command-line client.
It likes, saves, comments on and shares community posts and recipes,
browses success stories, and manages the acting user's recipes and
pet health records through the community REST API.
"""

import sys
import argparse
import logging
from typing import Optional, List

from config import settings
from utils.logger import get_logger, setup_file_logging
from utils.exceptions import CommunityClientError, ConfigurationError, user_message
from data.api_client import CommunityApiClient
from data.models import ActingUser, HealthRecord, InteractableItem, ItemType, StoryFilters
from services.comment_service import CommentThread
from services.console import BrowserOpener, ConsoleNotifier, TerminalClipboard
from services.health_service import HealthRecordForm
from services.protocols import CommunityApi, Notifier
from services.recipe_service import RecipeEditor
from services.share_service import ShareAction
from services.story_service import SuccessStoryBrowser, transformation_label
from services.toggle_service import LikeToggle, SaveToggle

# Set up logging
logger = get_logger(__name__)


class CommunityClient:
    """
    Command handlers for the community client.

    Each handler builds the widget the website would show for the command,
    drives it once, and prints the resulting state.
    """

    def __init__(self, api: Optional[CommunityApi] = None, notifier: Optional[Notifier] = None,
                 acting_user: Optional[ActingUser] = None, validate: bool = True):
        """Initialize the client with injected or default collaborators."""
        if validate:
            settings.validate_settings()

        self.acting_user = acting_user or ActingUser(settings.ACTING_USER_ID)
        self.api = api or CommunityApiClient(acting_user=self.acting_user)
        self.notifier = notifier or ConsoleNotifier()

    def like(self, item: InteractableItem, count: int, liked: bool) -> bool:
        toggle = LikeToggle(item, self.api, initial_likes=count, initial_liked=liked)
        state = toggle.toggle()
        print(f"{'♥' if state.liked else '♡'} {state.count}")
        return state.liked != liked

    def save(self, item: InteractableItem, saved: bool) -> bool:
        toggle = SaveToggle(item, self.api, initial_saved=saved)
        toggle.toggle()
        print(toggle.label)
        return toggle.saved != saved

    def show_comments(self, item: InteractableItem) -> bool:
        thread = CommentThread(item, self.api, self.notifier)
        thread.toggle()
        view = thread.view()

        print(view.count_label)
        if view.placeholder:
            print(f"  {view.placeholder}")
        for entry in view.entries:
            print(f"  [{entry.initial}] {entry.comment.user_name} · {entry.time_ago} · ♥ {entry.like.count}")
            print(f"      {entry.comment.content}")
            for reply in entry.replies:
                print(f"      ↳ {reply.comment.user_name} · {reply.time_ago} · ♥ {reply.like.count}")
                print(f"          {reply.comment.content}")
        return thread.loaded

    def add_comment(self, item: InteractableItem, content: str, reply_to: Optional[str] = None) -> bool:
        thread = CommentThread(item, self.api, self.notifier)
        comment = thread.submit(content, parent_comment_id=reply_to)
        if comment is None:
            return False
        print(f"Comment {comment.id} posted")
        return True

    def share(self, item: InteractableItem, title: str, description: str = "",
              target: str = "copy") -> bool:
        action = ShareAction(item, title, description,
                             clipboard=TerminalClipboard(), opener=BrowserOpener())
        action.share()

        if target == "copy":
            return action.copy_link()
        if target == "twitter":
            print(action.share_to_twitter())
        elif target == "facebook":
            print(action.share_to_facebook())
        elif target == "email":
            print(action.share_via_email())
        else:
            raise ValueError(f"Unknown share target: {target}")
        return True

    def stories(self, filters: StoryFilters) -> bool:
        browser = SuccessStoryBrowser(self.api, filters)
        stories = browser.refresh()

        if not stories:
            print(browser.empty_message)
            return True
        for story in stories:
            vet = " (vet approved)" if story.vet_approved else ""
            print(f"{story.pet_name} the {story.breed or story.pet_type} · "
                  f"{transformation_label(story.transformation_type)} · ♥ {browser.display_likes(story)}{vet}")
        return True

    def delete_recipe(self, recipe_id: str) -> bool:
        try:
            recipe = self.api.get_recipe(recipe_id)
        except CommunityClientError as e:
            logger.error(f"Error fetching recipe {recipe_id}: {e}")
            self.notifier.alert(user_message(e, "Failed to load recipe"))
            return False

        editor = RecipeEditor(self.api, self.notifier, self.acting_user, recipe)
        if not editor.can_edit:
            self.notifier.alert("You can only delete your own recipes")
            return False
        deleted = editor.delete()
        if deleted:
            print(f"Deleted recipe {recipe_id}")
        return deleted

    def add_health_record(self, record: HealthRecord) -> bool:
        form = HealthRecordForm(self.api, self.notifier)
        stored = form.add(record)
        if stored is None:
            return False
        print(f"Added health record {stored.get('id', '')}".rstrip())
        return True


def create_community_client(validate: bool = True, assume_yes: bool = False) -> CommunityClient:
    """Build a CommunityClient wired to the configured API and the terminal."""
    return CommunityClient(notifier=ConsoleNotifier(assume_yes=assume_yes), validate=validate)


def parse_item(type_name: str, item_id: str) -> InteractableItem:
    return InteractableItem(item_id, ItemType(type_name))


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Raw Feeding Community Client')
    parser.add_argument('--log-file', type=str, default=None, help='Log file path')
    parser.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='WARNING', help='Logging level')
    parser.add_argument('--yes', action='store_true', help='Answer yes to confirmation prompts')

    sub = parser.add_subparsers(dest='command', required=True)
    item_types = [t.value for t in ItemType]

    like = sub.add_parser('like', help='Toggle a like')
    like.add_argument('type', choices=item_types)
    like.add_argument('id')
    like.add_argument('--count', type=int, default=0, help='Current like count')
    like.add_argument('--liked', action='store_true', help='Item is currently liked')

    save = sub.add_parser('save', help='Toggle a save')
    save.add_argument('type', choices=['post', 'recipe'])
    save.add_argument('id')
    save.add_argument('--saved', action='store_true', help='Item is currently saved')

    comments = sub.add_parser('comments', help='List comments')
    comments.add_argument('type', choices=['post', 'recipe'])
    comments.add_argument('id')

    comment = sub.add_parser('comment', help='Add a comment')
    comment.add_argument('type', choices=['post', 'recipe'])
    comment.add_argument('id')
    comment.add_argument('content')
    comment.add_argument('--reply-to', default=None, help='Parent comment id')

    share = sub.add_parser('share', help='Share a post or recipe')
    share.add_argument('type', choices=['post', 'recipe'])
    share.add_argument('id')
    share.add_argument('--title', required=True)
    share.add_argument('--description', default='')
    share.add_argument('--target', choices=['copy', 'twitter', 'facebook', 'email'], default='copy')

    stories = sub.add_parser('stories', help='Browse success stories')
    stories.add_argument('--pet-type', default=settings.FILTER_ALL)
    stories.add_argument('--transformation', default=settings.FILTER_ALL)
    stories.add_argument('--timeframe', default=settings.FILTER_ALL)
    stories.add_argument('--sort-by', choices=settings.STORY_SORT_OPTIONS, default=settings.DEFAULT_STORY_SORT)

    delete = sub.add_parser('delete-recipe', help='Delete one of your recipes')
    delete.add_argument('id')

    health = sub.add_parser('health-record', help='Add a pet health record')
    health.add_argument('pet_id')
    health.add_argument('--type', dest='record_type', default='vaccination')
    health.add_argument('--date', required=True)
    health.add_argument('--title', required=True)
    health.add_argument('--provider', required=True)
    health.add_argument('--notes', default='')
    health.add_argument('--next-due-date', default='')
    health.add_argument('--cost', type=float, default=None)

    return parser.parse_args(argv)


def run_command(client: CommunityClient, args) -> bool:
    """Dispatch parsed arguments to the matching handler."""
    if args.command == 'like':
        return client.like(parse_item(args.type, args.id), args.count, args.liked)
    if args.command == 'save':
        return client.save(parse_item(args.type, args.id), args.saved)
    if args.command == 'comments':
        return client.show_comments(parse_item(args.type, args.id))
    if args.command == 'comment':
        return client.add_comment(parse_item(args.type, args.id), args.content, args.reply_to)
    if args.command == 'share':
        return client.share(parse_item(args.type, args.id), args.title, args.description, args.target)
    if args.command == 'stories':
        return client.stories(StoryFilters(
            pet_type=args.pet_type,
            transformation_type=args.transformation,
            timeframe=args.timeframe,
            sort_by=args.sort_by,
        ))
    if args.command == 'delete-recipe':
        return client.delete_recipe(args.id)
    if args.command == 'health-record':
        return client.add_health_record(HealthRecord(
            pet_id=args.pet_id,
            type=args.record_type,
            date=args.date,
            title=args.title,
            provider=args.provider,
            notes=args.notes,
            next_due_date=args.next_due_date,
            cost=args.cost,
        ))
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None):
    """Main entry point for the application."""
    args = parse_arguments(argv)

    # Set up logging
    log_level = getattr(logging, args.log_level)
    setup_file_logging(args.log_file, log_level)
    logger.debug(f"Configuration: {settings.get_config_summary()}")

    try:
        client = create_community_client(assume_yes=args.yes)
        success = run_command(client, args)
        exit_code = 0 if success else 1
    except ConfigurationError as e:
        logger.error(str(e))
        exit_code = 2
    except Exception as e:
        logger.error(f"Unhandled exception in community client: {e}", exc_info=True)
        exit_code = 2

    logger.info(f"Community client finished with exit code {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
